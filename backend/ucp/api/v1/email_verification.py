"""Email verification flow for the logged-in account.

1. POST /users/email/verification: email an email_verification code
2. GET /users/email/verification/{code}: check the link
3. PUT /users/email/verification/{code}: mark the email verified and
   consume every outstanding email_verification code of the account

A code only verifies the account it was issued to; following another
player's link while logged in is rejected like an unknown code.
"""

import logging

from fastapi import APIRouter

from ucp.api.deps import Accounts, CodeService, CurrentAccount, DbSession, Mailer
from ucp.core.email import compose_email_verification
from ucp.core.errors import DomainError
from ucp.core.responses import MessageResponse
from ucp.models.account import Account
from ucp.models.one_time_code import CodePurpose, OneTimeCode

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_ALREADY_VERIFIED = "Your email is already verified."
MSG_EMAIL_SENT = (
    "We've sent an email verification to you, "
    "please check your email in Inbox or Spam."
)
MSG_INVALID_LINK = "The link doesn't seem right. We couldn't help you to verify your email."
MSG_LINK_VALID = "The page link you've accessed is valid."
MSG_VERIFIED = "You've successfully verified your email account."


async def _require_own_code(
    codes: CodeService, code: str, account: Account
) -> OneTimeCode:
    row = await codes.find_valid(code, CodePurpose.EMAIL_VERIFICATION)
    if row is None or row.account_id != account.id:
        raise DomainError(MSG_INVALID_LINK, code="INVALID_CODE")
    return row


@router.post("/email/verification", status_code=201)
async def send_verification_email(
    account: CurrentAccount,
    codes: CodeService,
    mailer: Mailer,
    db: DbSession,
) -> MessageResponse:
    """Email a verification link to the account's address."""
    if account.email_verified:
        raise DomainError(MSG_ALREADY_VERIFIED, code="ALREADY_VERIFIED")

    code = await codes.issue_code(account.id, CodePurpose.EMAIL_VERIFICATION)
    subject, html = compose_email_verification(name=account.name, code=code)
    await mailer.send(to_email=account.email, subject=subject, html=html)
    await db.commit()
    return MessageResponse(msg=MSG_EMAIL_SENT)


@router.get("/email/verification/{code}", status_code=201)
async def check_verification_code(
    code: str,
    account: CurrentAccount,
    codes: CodeService,
) -> MessageResponse:
    """Tell the frontend whether a verification link is usable."""
    await _require_own_code(codes, code, account)
    return MessageResponse(msg=MSG_LINK_VALID)


@router.put("/email/verification/{code}", status_code=201)
async def confirm_verification_code(
    code: str,
    account: CurrentAccount,
    accounts: Accounts,
    codes: CodeService,
    db: DbSession,
) -> MessageResponse:
    """Mark the email verified and invalidate the account's codes."""
    await _require_own_code(codes, code, account)
    await accounts.update(account, email_verified=True)
    await codes.consume(account.id, CodePurpose.EMAIL_VERIFICATION)
    await db.commit()
    logger.info("Email verified for account %s", account.id)
    return MessageResponse(msg=MSG_VERIFIED)
