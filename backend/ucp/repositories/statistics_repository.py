"""Read-only counts for the server statistics page."""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ucp.models.account import Account
from ucp.models.asset import Property, Vehicle


class StatisticsRepository:
    """Aggregate counts over game server tables."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def _count(self, stmt: Select[tuple[int]]) -> int:
        result = await self._db.execute(stmt)
        return result.scalar_one()

    async def count_accounts(self) -> int:
        """Registered accounts."""
        return await self._count(select(func.count()).select_from(Account))

    async def count_owned_vehicles(self) -> int:
        """Vehicles with an owner."""
        return await self._count(
            select(func.count()).select_from(Vehicle).where(Vehicle.owner_sqlid != 0)
        )

    async def count_owned_properties(self) -> int:
        """Properties with an owner."""
        return await self._count(
            select(func.count()).select_from(Property).where(Property.owner_sqlid != 0)
        )
