"""Authentication endpoints: current account, login and registration.

Security considerations:
- login: unknown accounts still pay a bcrypt comparison against DUMMY_HASH,
  and every credential failure returns the same message
- admin login: same checks, then requires admin level >= 1
- register: bcrypt cost from settings, name and email uniqueness
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError

from ucp.api.deps import Accounts, CurrentAccount, DbSession, client_ip, json_body
from ucp.core.auth import create_session_token
from ucp.core.config import settings
from ucp.core.errors import DomainError
from ucp.core.rate_limiting import limiter
from ucp.core.responses import DataResponse, TokenResponse
from ucp.core.security import DUMMY_HASH, hash_password, verify_password
from ucp.models.account import Account
from ucp.schemas.account import AccountRead
from ucp.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_BAD_CREDENTIALS = "The username/email or password that you've entered is incorrect."
MSG_NOT_ADMIN = "You're not authorized to access this page."
MSG_NAME_TAKEN = "The username that you've entered is already exist."
MSG_EMAIL_TAKEN = "The email address that you've entered is already exist."
MSG_ACCOUNT_TAKEN = "An account with that username or email already exists."

LoginBody = Annotated[LoginRequest, Depends(json_body(LoginRequest))]
RegisterBody = Annotated[RegisterRequest, Depends(json_body(RegisterRequest))]


async def _ensure_available(accounts: Accounts, body: RegisterRequest) -> None:
    if await accounts.get_by_name(body.username) is not None:
        raise DomainError(MSG_NAME_TAKEN, code="NAME_TAKEN")
    if await accounts.get_by_email(body.email) is not None:
        raise DomainError(MSG_EMAIL_TAKEN, code="EMAIL_TAKEN")


def _issue_token(account: Account) -> TokenResponse:
    token = create_session_token(
        account_id=account.id,
        admin=account.admin,
        helper=account.helper,
        secret=settings.auth_secret.get_secret_value(),
    )
    return TokenResponse(token=token)


async def _authenticate(accounts: Accounts, body: LoginRequest) -> Account:
    """Resolve credentials to an account or raise a uniform 400."""
    account = await accounts.get_by_name_or_email(body.usermail)
    if account is None:
        # Security: keep response time independent of account existence
        verify_password(body.password, DUMMY_HASH)
        logger.info("Login failed: unknown account")
        raise DomainError(MSG_BAD_CREDENTIALS, code="INVALID_CREDENTIALS")
    if not verify_password(body.password, account.password_hash):
        logger.info("Login failed: wrong password for account %s", account.id)
        raise DomainError(MSG_BAD_CREDENTIALS, code="INVALID_CREDENTIALS")
    return account


# ===================================================================
# GET /auth
# ===================================================================


@router.get("")
async def get_me(account: CurrentAccount) -> DataResponse[AccountRead]:
    """Return the account the session token belongs to."""
    return DataResponse(data=AccountRead.model_validate(account))


# ===================================================================
# POST /auth
# ===================================================================


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_auth)
async def login(
    request: Request,
    body: LoginBody,
    accounts: Accounts,
    db: DbSession,
) -> TokenResponse:
    """Exchange a username or email plus password for a session token."""
    account = await _authenticate(accounts, body)
    await accounts.update(account, ucp_login_ip=client_ip(request))
    await db.commit()
    logger.info("Account %s logged in", account.id)
    return _issue_token(account)


# ===================================================================
# POST /auth/admin
# ===================================================================


@router.post("/admin", status_code=201)
@limiter.limit(settings.rate_limit_auth)
async def admin_login(
    request: Request,
    body: LoginBody,
    accounts: Accounts,
    db: DbSession,
) -> TokenResponse:
    """Login for the admin panel. Rejects accounts without an admin level."""
    account = await _authenticate(accounts, body)
    if account.admin < 1:
        logger.info("Admin login refused for account %s", account.id)
        raise DomainError(MSG_NOT_ADMIN, code="NOT_ADMIN")
    await accounts.update(account, ucp_login_ip=client_ip(request))
    await db.commit()
    logger.info("Admin %s logged in", account.id)
    return _issue_token(account)


# ===================================================================
# POST /auth/new
# ===================================================================


@router.post("/new", status_code=201)
@limiter.limit(settings.rate_limit_auth)
async def register(
    request: Request,
    body: RegisterBody,
    accounts: Accounts,
    db: DbSession,
) -> TokenResponse:
    """Create an account and log it in."""
    await _ensure_available(accounts, body)

    try:
        account = await accounts.create(
            name=body.username,
            email=body.email,
            password_hash=hash_password(body.password),
            register_ip=client_ip(request),
        )
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration; report whichever
        # handle the winner took
        await db.rollback()
        await _ensure_available(accounts, body)
        raise DomainError(MSG_ACCOUNT_TAKEN, code="ACCOUNT_TAKEN") from None

    logger.info("Registered account %s", account.id)
    return _issue_token(account)
