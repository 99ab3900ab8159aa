"""One-time code model - password reset and email verification links.

Rows live in ``user_sessions``. Only the SHA-256 digest of a code is
stored; the plain code exists solely in the email that carries it.
"""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ucp.models.base import Base


class CodePurpose(StrEnum):
    """Workflow a code was issued for."""

    EMAIL_VERIFICATION = "email_verification"
    FORGOT_PASSWORD = "forgot_password"


class OneTimeCode(Base):
    """Single-use code bound to an account and a purpose.

    Attributes:
        id: Integer primary key.
        account_id: Owning account (``user_id`` column).
        code_hash: SHA-256 hex digest of the plain code (``code`` column).
        purpose: CodePurpose value (``type`` column).
        created_at: Issue timestamp.
    """

    __tablename__ = "user_sessions"
    __table_args__ = (
        Index("ix_user_sessions_code_type", "code", "type"),
        Index("ix_user_sessions_user_id_type", "user_id", "type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    code_hash: Mapped[str] = mapped_column("code", String(129), nullable=False)
    purpose: Mapped[str] = mapped_column("type", String(60), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
