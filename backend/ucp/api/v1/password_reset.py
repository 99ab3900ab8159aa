"""Forgot-password flow.

1. POST /auth/reset: email a forgot_password code to a verified address
2. GET /auth/reset/{code}: let the frontend check the link before showing
   the form
3. PUT /auth/reset/{code}: set the new password and consume every
   outstanding forgot_password code of the account

Step 3 applies the new hash and deletes the codes in one transaction.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from ucp.api.deps import Accounts, CodeService, DbSession, Mailer, json_body
from ucp.core.config import settings
from ucp.core.email import compose_password_reset
from ucp.core.errors import DomainError
from ucp.core.rate_limiting import limiter
from ucp.core.responses import MessageResponse
from ucp.core.security import hash_password
from ucp.models.one_time_code import CodePurpose
from ucp.schemas.auth import PasswordResetConfirm, PasswordResetRequest

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_UNKNOWN_EMAIL = "The email address that you've entered does not exist."
MSG_UNVERIFIED_EMAIL = "That email is not verified yet."
MSG_EMAIL_SENT = "We've sent an email to you, please check your email in Inbox or Spam."
MSG_INVALID_LINK = "The page link is invalid or session has been expired."
MSG_LINK_VALID = "The page link you've accessed is valid."
MSG_PASSWORD_CHANGED = "You have changed a new password."

ResetRequestBody = Annotated[
    PasswordResetRequest, Depends(json_body(PasswordResetRequest))
]
ResetConfirmBody = Annotated[
    PasswordResetConfirm, Depends(json_body(PasswordResetConfirm))
]


@router.post("/reset", status_code=201)
@limiter.limit(settings.rate_limit_auth)
async def request_password_reset(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: ResetRequestBody,
    accounts: Accounts,
    codes: CodeService,
    mailer: Mailer,
    db: DbSession,
) -> MessageResponse:
    """Email a password reset link to a verified address."""
    account = await accounts.get_by_email(body.email)
    if account is None:
        raise DomainError(MSG_UNKNOWN_EMAIL, code="UNKNOWN_EMAIL")
    if not account.email_verified:
        raise DomainError(MSG_UNVERIFIED_EMAIL, code="EMAIL_NOT_VERIFIED")

    code = await codes.issue_code(account.id, CodePurpose.FORGOT_PASSWORD)
    subject, html = compose_password_reset(name=account.name, code=code)
    # A delivery failure propagates and the code row is rolled back
    await mailer.send(to_email=account.email, subject=subject, html=html)
    await db.commit()
    return MessageResponse(msg=MSG_EMAIL_SENT)


@router.get("/reset/{code}", status_code=201)
async def check_password_reset(code: str, codes: CodeService) -> MessageResponse:
    """Tell the frontend whether a reset link is still usable."""
    if await codes.find_valid(code, CodePurpose.FORGOT_PASSWORD) is None:
        raise DomainError(MSG_INVALID_LINK, code="INVALID_CODE")
    return MessageResponse(msg=MSG_LINK_VALID)


@router.put("/reset/{code}", status_code=201)
async def confirm_password_reset(
    code: str,
    body: ResetConfirmBody,
    accounts: Accounts,
    codes: CodeService,
    db: DbSession,
) -> MessageResponse:
    """Set a new password using a reset code, then invalidate the code."""
    row = await codes.find_valid(code, CodePurpose.FORGOT_PASSWORD)
    if row is None:
        raise DomainError(MSG_INVALID_LINK, code="INVALID_CODE")
    account = await accounts.get_by_id(row.account_id)
    if account is None:
        raise DomainError(MSG_INVALID_LINK, code="INVALID_CODE")

    await accounts.update(account, password_hash=hash_password(body.password))
    await codes.consume(account.id, CodePurpose.FORGOT_PASSWORD)
    await db.commit()
    logger.info("Password reset completed for account %s", account.id)
    return MessageResponse(msg=MSG_PASSWORD_CHANGED)
