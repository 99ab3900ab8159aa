"""Shared dependencies for API endpoints.

Request pipeline. Every route declares its dependencies in this order, and
FastAPI resolves them in declaration order, so a failing stage
short-circuits everything after it:

1. json_body(Model): parse and validate the JSON body (400)
2. get_session_claims: verify the session token (401)
3. get_current_account / require_admin: load the account and check its
   admin level (401)
4. the handler itself

WHY DEPENDENCY INJECTION:
- Consistent auth across all endpoints
- Repositories and the mailer are swappable in tests via
  app.dependency_overrides
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import pydantic
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ucp.core.auth import (
    InvalidSessionToken,
    SessionClaims,
    decode_session_token,
    read_session_token,
)
from ucp.core.config import settings
from ucp.core.database import get_db
from ucp.core.email import EmailSender
from ucp.core.errors import AdminRequiredError, UnauthorizedError
from ucp.models.account import Account
from ucp.repositories.account_repository import AccountRepository
from ucp.repositories.application_repository import ApplicationRepository
from ucp.repositories.ban_repository import BanRepository
from ucp.repositories.character_repository import CharacterRepository
from ucp.repositories.news_repository import NewsRepository
from ucp.repositories.one_time_code_repository import OneTimeCodeRepository
from ucp.repositories.quiz_repository import QuizRepository
from ucp.repositories.statistics_repository import StatisticsRepository
from ucp.services.character_service import CharacterService
from ucp.services.one_time_codes import OneTimeCodeService

M = TypeVar("M", bound=pydantic.BaseModel)

_MSG_TOKEN_MISSING = "Token not found, authorization denied."
_MSG_TOKEN_INVALID = "Invalid token."


# =============================================================================
# Stage 1: body validation
# =============================================================================


def json_body(model: type[M]) -> Callable[[Request], Awaitable[M]]:
    """Build a dependency that validates the JSON body against ``model``.

    A missing or unparseable body validates as ``{}``, so each required
    field is reported individually instead of one "invalid JSON" error.

    Args:
        model: Pydantic model describing the body.

    Returns:
        Dependency callable returning the validated model.
    """

    async def _parse(request: Request) -> M:
        try:
            payload = await request.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as exc:
            errors = [
                {**error, "loc": ("body", *error["loc"])} for error in exc.errors()
            ]
            raise RequestValidationError(errors) from exc

    return _parse


# =============================================================================
# Stage 2: session token
# =============================================================================


def get_session_claims(request: Request) -> SessionClaims:
    """Validate the session token on the request.

    Reads the configured header (``x-auth-token``), falling back to
    ``Authorization: Bearer``.

    Raises:
        UnauthorizedError: 401 when no token is present or it fails
            validation. The message does not say why validation failed.
    """
    token = read_session_token(request.headers)
    if not token:
        raise UnauthorizedError(_MSG_TOKEN_MISSING)
    try:
        return decode_session_token(
            token, secret=settings.auth_secret.get_secret_value()
        )
    except InvalidSessionToken:
        raise UnauthorizedError(_MSG_TOKEN_INVALID) from None


SessionClaimsDep = Annotated[SessionClaims, Depends(get_session_claims)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# Repositories and services
# =============================================================================


def get_account_repository(db: DbSession) -> AccountRepository:
    """Account repository bound to the request session."""
    return AccountRepository(db)


def get_code_repository(db: DbSession) -> OneTimeCodeRepository:
    """One-time code repository bound to the request session."""
    return OneTimeCodeRepository(db)


def get_character_repository(db: DbSession) -> CharacterRepository:
    """Character repository bound to the request session."""
    return CharacterRepository(db)


def get_news_repository(db: DbSession) -> NewsRepository:
    """News repository bound to the request session."""
    return NewsRepository(db)


def get_ban_repository(db: DbSession) -> BanRepository:
    """Ban repository bound to the request session."""
    return BanRepository(db)


def get_quiz_repository(db: DbSession) -> QuizRepository:
    """Quiz repository bound to the request session."""
    return QuizRepository(db)


def get_application_repository(db: DbSession) -> ApplicationRepository:
    """Application repository bound to the request session."""
    return ApplicationRepository(db)


def get_statistics_repository(db: DbSession) -> StatisticsRepository:
    """Statistics repository bound to the request session."""
    return StatisticsRepository(db)


Accounts = Annotated[AccountRepository, Depends(get_account_repository)]
Characters = Annotated[CharacterRepository, Depends(get_character_repository)]
NewsItems = Annotated[NewsRepository, Depends(get_news_repository)]
Bans = Annotated[BanRepository, Depends(get_ban_repository)]
Quizzes = Annotated[QuizRepository, Depends(get_quiz_repository)]
Applications = Annotated[ApplicationRepository, Depends(get_application_repository)]
Statistics = Annotated[StatisticsRepository, Depends(get_statistics_repository)]


def get_code_service(
    store: Annotated[OneTimeCodeRepository, Depends(get_code_repository)],
) -> OneTimeCodeService:
    """One-time code service over the request's code repository."""
    return OneTimeCodeService(store)


def get_character_service(
    characters: Characters, accounts: Accounts
) -> CharacterService:
    """Character service over the request's repositories."""
    return CharacterService(characters, accounts)


def get_email_sender() -> EmailSender:
    """Outbound mailer. Tests override this with a recording double."""
    return EmailSender()


CodeService = Annotated[OneTimeCodeService, Depends(get_code_service)]
CharacterServiceDep = Annotated[CharacterService, Depends(get_character_service)]
Mailer = Annotated[EmailSender, Depends(get_email_sender)]


# =============================================================================
# Stage 3: authorization
# =============================================================================


async def get_current_account(
    claims: SessionClaimsDep,
    accounts: Accounts,
) -> Account:
    """Load the token's account fresh from the database.

    Role claims inside the token are not trusted; downstream checks use the
    row loaded here.

    Raises:
        UnauthorizedError: 401 if the account no longer exists.
    """
    account = await accounts.get_by_id(claims.account_id)
    if account is None:
        raise UnauthorizedError(_MSG_TOKEN_INVALID)
    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]


async def require_admin(account: CurrentAccount) -> Account:
    """Require an admin level of at least 1.

    Raises:
        AdminRequiredError: 401 for non-admin accounts.
    """
    if account.admin < 1:
        raise AdminRequiredError()
    return account


AdminAccount = Annotated[Account, Depends(require_admin)]


# =============================================================================
# Helpers
# =============================================================================


def client_ip(request: Request) -> str | None:
    """Best-effort client address: first X-Forwarded-For hop, else the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None
