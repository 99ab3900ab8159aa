"""Repository for whitelist applications."""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ucp.models.application import UserApplication

_WITH_RELATED = (
    selectinload(UserApplication.applicant),
    selectinload(UserApplication.reviewer),
    selectinload(UserApplication.quiz),
)


def _select_one(application_id: int) -> Select[tuple[UserApplication]]:
    return (
        select(UserApplication)
        .where(UserApplication.id == application_id)
        .options(*_WITH_RELATED)
        .execution_options(populate_existing=True)
    )


class ApplicationRepository:
    """Repository for the ``user_applications`` table.

    Reads eager-load applicant, reviewer and quiz for ApplicationRead.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_latest(self) -> list[UserApplication]:
        """All applications, newest first."""
        stmt = (
            select(UserApplication)
            .options(*_WITH_RELATED)
            .order_by(UserApplication.id.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, application_id: int) -> UserApplication | None:
        """Fetch an application by id."""
        result = await self._db.execute(_select_one(application_id))
        return result.scalar_one_or_none()

    async def create(
        self,
        *,
        account_id: int,
        quiz_id: int,
        score: int,
        answer: str,
        status: int,
    ) -> UserApplication:
        """Create an application."""
        application = UserApplication(
            account_id=account_id,
            quiz_id=quiz_id,
            score=score,
            answer=answer,
            status=status,
        )
        self._db.add(application)
        await self._db.flush()
        return application

    async def review(
        self,
        application: UserApplication,
        *,
        reviewer_id: int,
        status: int,
        reason: str,
    ) -> UserApplication:
        """Record a review decision and return the refreshed application."""
        application.reviewer_id = reviewer_id
        application.status = status
        application.reason = reason
        await self._db.flush()
        result = await self._db.execute(_select_one(application.id))
        return result.scalar_one()
