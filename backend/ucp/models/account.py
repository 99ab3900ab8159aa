"""Account model - control panel login identity.

Maps the game server's ``users`` table. In-game characters hang off an
account but are separate records (see character.py).
"""

from datetime import datetime
from enum import IntEnum

from sqlalchemy import Boolean, DateTime, Integer, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ucp.models.base import Base


class ApplicationStatus(IntEnum):
    """Whitelist application state stored on the account row."""

    UNSET = 0
    PENDING = 1
    APPROVED = 2
    DENIED = 3


class Account(Base):
    """Registered player account.

    Attributes:
        id: Integer primary key.
        name: Unique handle, also used as the in-game account name.
        email: Unique email address, stored lowercase.
        email_verified: Whether the email address has been verified.
        password_hash: bcrypt hash (``password`` column). Never serialized.
        admin: Admin level. 0 means no admin rights; higher is stronger.
        helper: Whether the account is a community helper.
        status: ApplicationStatus value.
        register_ip: Client address at registration.
        ucp_login_ip: Client address at the last control panel login.
        delay_character_deletion: No character may be deleted before this.
        registered_at: Account creation timestamp.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(
        String(24),
        unique=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    password_hash: Mapped[str] = mapped_column(
        "password",
        String(129),
        nullable=False,
    )
    admin: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    helper: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    status: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        default=ApplicationStatus.UNSET,
        server_default="0",
    )
    register_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    ucp_login_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    delay_character_deletion: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
