"""Character and faction models.

Characters are the in-game personas owned by an account. The game server
writes most of their columns; the control panel creates and deletes rows and
reads a summary. Admin warnings and inventory belong to a character and are
read only.
"""

from sqlalchemy import ForeignKey, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucp.models.base import Base


class Faction(Base):
    """In-game faction (police, medics, gangs...).

    Attributes:
        id: Integer primary key.
        name: Display name.
        alias: Short tag.
    """

    __tablename__ = "factions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    alias: Mapped[str | None] = mapped_column(String(30), nullable=True)


class Character(Base):
    """In-game character owned by an account.

    Attributes:
        id: Integer primary key.
        account_id: Owning account (``userid`` column).
        name: Unique ``Firstname_Lastname`` handle.
        gender: 0 male, 1 female.
        skin_id: Skin model id.
        level: Character level.
        money: Cash on hand.
        bank: Bank balance.
        faction_id: Faction membership (``faction_sqlid`` column), 0 for none.
    """

    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        "userid",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(24), unique=True, nullable=False)
    gender: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    skin_id: Mapped[int] = mapped_column(Integer, nullable=False)
    level: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
    money: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    bank: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    # No FK: the game server uses 0 for "no faction"
    faction_id: Mapped[int] = mapped_column(
        "faction_sqlid", Integer, nullable=False, default=0, server_default="0"
    )

    faction: Mapped["Faction | None"] = relationship(
        primaryjoin="foreign(Character.faction_id) == Faction.id",
        viewonly=True,
        lazy="raise",
    )

class AdminWarn(Base):
    """Warning an admin issued to a character in game.

    Attributes:
        id: Integer primary key.
        character_id: Warned character (``char_id`` column).
        timestamp: Unix time the warning was issued.
        type: Warning kind as numbered by the game server.
        issuer: Name of the issuing admin.
        reason: Free-text reason.
    """

    __tablename__ = "admin_warn"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    character_id: Mapped[int] = mapped_column(
        "char_id",
        Integer,
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    issuer: Mapped[str] = mapped_column(String(24), nullable=False)
    reason: Mapped[str] = mapped_column(String(128), nullable=False)


class InventoryItem(Base):
    """Stack of one item in a character's inventory.

    Attributes:
        id: Integer primary key.
        character_id: Holding character (``char_id`` column).
        name: Item name.
        amount: Stack size.
    """

    __tablename__ = "inventory_player"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    character_id: Mapped[int] = mapped_column(
        "char_id",
        Integer,
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
