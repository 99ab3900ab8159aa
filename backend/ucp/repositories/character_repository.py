"""Repository for Character rows owned by accounts and what they hold."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ucp.models.asset import Property, Vehicle
from ucp.models.character import AdminWarn, Character, InventoryItem


class CharacterRepository:
    """Repository for the ``characters`` table.

    Every read that returns characters eager-loads the faction so the
    result can be serialized outside the session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_for_account(self, account_id: int) -> list[Character]:
        """All characters of an account, oldest first."""
        stmt = (
            select(Character)
            .where(Character.account_id == account_id)
            .options(selectinload(Character.faction))
            .order_by(Character.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def count_for_account(self, account_id: int) -> int:
        """Number of characters an account owns."""
        stmt = select(func.count()).where(Character.account_id == account_id)
        result = await self._db.execute(stmt)
        return result.scalar_one()

    async def get_owned(self, character_id: int, account_id: int) -> Character | None:
        """Fetch a character only if it belongs to ``account_id``."""
        stmt = (
            select(Character)
            .where(Character.id == character_id, Character.account_id == account_id)
            .options(selectinload(Character.faction))
        )
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def name_exists(self, name: str) -> bool:
        """Whether a character already uses this name (case-insensitive)."""
        stmt = select(Character.id).where(func.lower(Character.name) == name.lower())
        result = await self._db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(
        self,
        *,
        account_id: int,
        name: str,
        gender: int,
        skin_id: int,
    ) -> Character:
        """Create a character with game-server defaults for everything else."""
        character = Character(
            account_id=account_id,
            name=name,
            gender=gender,
            skin_id=skin_id,
        )
        self._db.add(character)
        await self._db.flush()
        return character

    async def delete(self, character_id: int) -> None:
        """Delete a character by id."""
        await self._db.execute(delete(Character).where(Character.id == character_id))

    async def in_faction(self, account_id: int, faction_id: int) -> bool:
        """Whether any of the account's characters belongs to ``faction_id``."""
        stmt = select(Character.id).where(
            Character.account_id == account_id,
            Character.faction_id == faction_id,
        )
        result = await self._db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_faction_members(self, faction_id: int) -> list[Character]:
        """Members of a faction, highest level first."""
        stmt = (
            select(Character)
            .where(Character.faction_id == faction_id)
            .order_by(Character.level.desc(), Character.name)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def list_admin_warns(self, character_id: int) -> list[AdminWarn]:
        """Admin warnings of a character, newest first."""
        stmt = (
            select(AdminWarn)
            .where(AdminWarn.character_id == character_id)
            .order_by(AdminWarn.timestamp.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def list_inventory(self, character_id: int) -> list[InventoryItem]:
        """Inventory stacks of a character, largest first."""
        stmt = (
            select(InventoryItem)
            .where(InventoryItem.character_id == character_id)
            .order_by(InventoryItem.amount.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def list_vehicles(self, character_id: int) -> list[Vehicle]:
        """Vehicles owned by a character, most driven first."""
        stmt = (
            select(Vehicle)
            .where(Vehicle.owner_sqlid == character_id)
            .order_by(Vehicle.mileage.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def list_properties(self, character_id: int) -> list[Property]:
        """Properties owned by a character, most expensive first.

        The owner is eager-loaded so its name can be serialized.
        """
        stmt = (
            select(Property)
            .where(Property.owner_sqlid == character_id)
            .options(selectinload(Property.owner))
            .order_by(Property.price.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())
