"""News endpoints.

Every endpoint requires an admin, reads included. Slugs are derived from
the title and must be unique.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ucp.api.deps import AdminAccount, DbSession, NewsItems, json_body, require_admin
from ucp.core.errors import DomainError, ValidationError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.schemas.news import NewsRead, NewsWrite
from ucp.services.slugs import slugify

logger = logging.getLogger(__name__)

router = APIRouter()

HEADLINE_COUNT = 5

MSG_NOT_FOUND = "That news does not exist."
MSG_UNKNOWN_ID = "The id of news that you've selected does not exist."
MSG_SLUG_TAKEN = "Another news item already uses that title."
MSG_BAD_TITLE = "Title must contain at least one letter or number."
MSG_DELETED = "Deleted news successfully."

WriteBody = Annotated[NewsWrite, Depends(json_body(NewsWrite))]


def _slug_for(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise ValidationError(MSG_BAD_TITLE)
    return slug


@router.get("/headline", dependencies=[Depends(require_admin)])
async def list_headlines(news: NewsItems) -> DataResponse[list[NewsRead]]:
    """The latest few articles for the front page."""
    rows = await news.list_latest(HEADLINE_COUNT)
    return DataResponse(data=[NewsRead.model_validate(row) for row in rows])


@router.get("", dependencies=[Depends(require_admin)])
async def list_news(news: NewsItems) -> DataResponse[list[NewsRead]]:
    """All articles, newest first."""
    rows = await news.list_latest()
    return DataResponse(data=[NewsRead.model_validate(row) for row in rows])


@router.get("/{slug}", dependencies=[Depends(require_admin)])
async def get_news(slug: str, news: NewsItems) -> DataResponse[NewsRead]:
    """One article by slug."""
    item = await news.get_by_slug(slug)
    if item is None:
        raise DomainError(MSG_NOT_FOUND, code="NOT_FOUND")
    return DataResponse(data=NewsRead.model_validate(item))


@router.post("", status_code=201)
async def create_news(
    body: WriteBody,
    admin: AdminAccount,
    news: NewsItems,
    db: DbSession,
) -> DataResponse[NewsRead]:
    """Publish an article (admin)."""
    slug = _slug_for(body.title)
    if await news.slug_taken(slug):
        raise DomainError(MSG_SLUG_TAKEN, code="SLUG_TAKEN")

    item = await news.create(
        title=body.title,
        slug=slug,
        content=body.content,
        image=body.image,
        author_id=admin.id,
    )
    await db.commit()
    logger.info("Admin %s published news %s", admin.id, item.id)
    return DataResponse(data=NewsRead.model_validate(item))


@router.put("/{news_id}", status_code=201)
async def update_news(
    news_id: int,
    body: WriteBody,
    admin: AdminAccount,
    news: NewsItems,
    db: DbSession,
) -> DataResponse[NewsRead]:
    """Edit an article and record the editor (admin)."""
    item = await news.get_by_id(news_id)
    if item is None:
        raise DomainError(MSG_UNKNOWN_ID, code="NOT_FOUND")
    slug = _slug_for(body.title)
    if await news.slug_taken(slug, exclude_id=item.id):
        raise DomainError(MSG_SLUG_TAKEN, code="SLUG_TAKEN")

    item = await news.update(
        item,
        title=body.title,
        slug=slug,
        content=body.content,
        image=body.image,
        editor_id=admin.id,
    )
    await db.commit()
    return DataResponse(data=NewsRead.model_validate(item))


@router.delete("/{news_id}", status_code=201)
async def delete_news(
    news_id: int,
    admin: AdminAccount,
    news: NewsItems,
    db: DbSession,
) -> MessageResponse:
    """Delete an article (admin)."""
    item = await news.get_by_id(news_id)
    if item is None:
        raise DomainError(MSG_UNKNOWN_ID, code="NOT_FOUND")
    await news.delete(item)
    await db.commit()
    logger.info("Admin %s deleted news %s", admin.id, news_id)
    return MessageResponse(msg=MSG_DELETED)
