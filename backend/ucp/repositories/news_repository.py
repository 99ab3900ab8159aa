"""Repository for News articles."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ucp.models.news import News

_WITH_PEOPLE = (selectinload(News.author), selectinload(News.editor))


class NewsRepository:
    """Repository for the ``news`` table.

    Reads eager-load author and editor for the name fields of NewsRead.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_latest(self, limit: int | None = None) -> list[News]:
        """Articles newest first, optionally capped at ``limit``."""
        stmt = select(News).options(*_WITH_PEOPLE).order_by(News.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> News | None:
        """Fetch an article by slug."""
        stmt = select(News).where(News.slug == slug).options(*_WITH_PEOPLE)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, news_id: int) -> News | None:
        """Fetch an article by id."""
        stmt = select(News).where(News.id == news_id).options(*_WITH_PEOPLE)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, *, exclude_id: int | None = None) -> bool:
        """Whether another article already uses ``slug``."""
        stmt = select(News.id).where(News.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(News.id != exclude_id)
        result = await self._db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(
        self,
        *,
        title: str,
        slug: str,
        content: str,
        image: str | None,
        author_id: int,
    ) -> News:
        """Create an article and return it with people loaded."""
        news = News(
            title=title,
            slug=slug,
            content=content,
            image=image,
            created_by=author_id,
        )
        self._db.add(news)
        await self._db.flush()
        return await self._reload(news.id)

    async def update(
        self,
        news: News,
        *,
        title: str,
        slug: str,
        content: str,
        image: str | None,
        editor_id: int,
    ) -> News:
        """Overwrite an article's content and record the editor."""
        news.title = title
        news.slug = slug
        news.content = content
        news.image = image
        news.updated_by = editor_id
        await self._db.flush()
        return await self._reload(news.id)

    async def delete(self, news: News) -> None:
        """Delete an article."""
        await self._db.delete(news)
        await self._db.flush()

    async def _reload(self, news_id: int) -> News:
        stmt = (
            select(News)
            .where(News.id == news_id)
            .options(*_WITH_PEOPLE)
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        return result.scalar_one()
