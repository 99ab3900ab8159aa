"""Player-ownable world assets.

The game server owns these rows. The control panel counts them for the
statistics page and lists them for their owning character.
"""

from sqlalchemy import Float, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucp.models.base import Base
from ucp.models.character import Character


class Vehicle(Base):
    """Vehicle spawned by the game server.

    Attributes:
        id: Integer primary key.
        owner_sqlid: Owning character id, 0 means unowned.
        model: Game vehicle model id.
        name: Display name.
        number_plate: Plate text.
        color_1: Primary color index.
        color_2: Secondary color index.
        health: Current body health.
        max_health: Body health when fully repaired.
        mileage: Distance driven.
        fuel: Fuel left.
        lock_status: 1 when locked.
    """

    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # No FK: the game server uses 0 for "no owner"
    owner_sqlid: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    model: Mapped[int] = mapped_column(
        Integer, nullable=False, default=400, server_default="400"
    )
    name: Mapped[str | None] = mapped_column(String(32), nullable=True)
    number_plate: Mapped[str | None] = mapped_column(String(32), nullable=True)
    color_1: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    color_2: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    health: Mapped[float] = mapped_column(
        Float, nullable=False, default=1000.0, server_default="1000"
    )
    max_health: Mapped[float] = mapped_column(
        Float, nullable=False, default=1000.0, server_default="1000"
    )
    mileage: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default="0"
    )
    fuel: Mapped[float] = mapped_column(
        Float, nullable=False, default=100.0, server_default="100"
    )
    lock_status: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )


class Property(Base):
    """House or business property.

    Attributes:
        id: Integer primary key.
        owner_sqlid: Owning character id, 0 means for sale.
        type: Property kind as numbered by the game server.
        level: Upgrade level.
        price: Sale price.
        address_number: Street number.
        address_name: Street name.
        lock_status: 1 when locked.
        owner: Owning character, loaded explicitly.
    """

    __tablename__ = "property"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # No FK: the game server uses 0 for "for sale"
    owner_sqlid: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    type: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )
    level: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=1, server_default="1"
    )
    price: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    address_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    address_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    lock_status: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default="0"
    )

    owner: Mapped["Character | None"] = relationship(
        primaryjoin="foreign(Property.owner_sqlid) == Character.id",
        viewonly=True,
        lazy="raise",
    )
