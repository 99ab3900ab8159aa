"""Repository for Ban rows."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ucp.models.ban import Ban


class BanRepository:
    """Repository for the ``bans`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_latest(self) -> list[Ban]:
        """All bans, newest first."""
        result = await self._db.execute(select(Ban).order_by(Ban.id.desc()))
        return list(result.scalars().all())

    async def get_by_id(self, ban_id: int) -> Ban | None:
        """Fetch a ban by id."""
        return await self._db.get(Ban, ban_id)

    async def delete(self, ban: Ban) -> None:
        """Lift a ban by deleting its row."""
        await self._db.delete(ban)
        await self._db.flush()
