"""Ban model - account bans issued in-game by administrators.

Timestamps are Unix seconds because the game server writes this table.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ucp.models.base import Base


class Ban(Base):
    """Account ban.

    Attributes:
        id: Integer primary key.
        account: Banned account name.
        issuer: Name of the administrator who issued the ban.
        reason: Free-text reason.
        timestamp: Issue time (Unix seconds).
        timestamp_expired: Expiry time (Unix seconds), 0 for permanent.
    """

    __tablename__ = "bans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account: Mapped[str] = mapped_column(String(24), nullable=False)
    issuer: Mapped[str] = mapped_column(String(24), nullable=False)
    reason: Mapped[str] = mapped_column(String(128), nullable=False)
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp_expired: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
