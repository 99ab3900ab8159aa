"""Account self-service and role administration.

- PUT /users/change/password: change password, given the old one
- PUT /users/change/email: move the account to a new, unverified address
- PUT /users/{account_id}/roles: set admin level and helper flag (admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ucp.api.deps import (
    Accounts,
    AdminAccount,
    CodeService,
    CurrentAccount,
    DbSession,
    Mailer,
    json_body,
)
from ucp.core.email import compose_email_changed, compose_password_changed
from ucp.core.errors import DomainError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.core.security import hash_password, verify_password
from ucp.models.one_time_code import CodePurpose
from ucp.schemas.account import (
    AccountRead,
    ChangeEmailRequest,
    ChangePasswordRequest,
    RoleUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_WRONG_OLD_PASSWORD = "Incorrect old password."  # nosec B105
MSG_PASSWORD_CHANGED = "You have changed a new password."
MSG_EMAIL_TAKEN = "The email that you've entered is already exist."
MSG_EMAIL_CHANGED = "You have changed a new email."
MSG_OWN_ROLES = "You can't change your own roles."
MSG_LEVEL_TOO_HIGH = "You can't grant an admin level above your own."
MSG_UNKNOWN_ACCOUNT = "The account you've selected does not exist."

ChangePasswordBody = Annotated[
    ChangePasswordRequest, Depends(json_body(ChangePasswordRequest))
]
ChangeEmailBody = Annotated[ChangeEmailRequest, Depends(json_body(ChangeEmailRequest))]
RoleUpdateBody = Annotated[RoleUpdateRequest, Depends(json_body(RoleUpdateRequest))]


@router.put("/change/password", status_code=201)
async def change_password(
    body: ChangePasswordBody,
    account: CurrentAccount,
    accounts: Accounts,
    mailer: Mailer,
    db: DbSession,
) -> MessageResponse:
    """Change the password after checking the old one, then notify by email."""
    if not verify_password(body.old_password, account.password_hash):
        raise DomainError(MSG_WRONG_OLD_PASSWORD, code="WRONG_PASSWORD")

    await accounts.update(account, password_hash=hash_password(body.password))
    subject, html = compose_password_changed(name=account.name)
    await mailer.send(to_email=account.email, subject=subject, html=html)
    await db.commit()
    logger.info("Password changed for account %s", account.id)
    return MessageResponse(msg=MSG_PASSWORD_CHANGED)


@router.put("/change/email", status_code=201)
async def change_email(
    body: ChangeEmailBody,
    account: CurrentAccount,
    accounts: Accounts,
    codes: CodeService,
    mailer: Mailer,
    db: DbSession,
) -> MessageResponse:
    """Switch to a new address. The new address starts unverified."""
    existing = await accounts.get_by_email(body.new_email)
    if existing is not None:
        raise DomainError(MSG_EMAIL_TAKEN, code="EMAIL_TAKEN")

    await accounts.update(account, email=body.new_email, email_verified=False)
    # Links sent to the old address must not verify the new one
    await codes.consume(account.id, CodePurpose.EMAIL_VERIFICATION)
    subject, html = compose_email_changed(name=account.name)
    await mailer.send(to_email=account.email, subject=subject, html=html)
    await db.commit()
    logger.info("Email changed for account %s", account.id)
    return MessageResponse(msg=MSG_EMAIL_CHANGED)


@router.put("/{account_id}/roles", status_code=201)
async def update_roles(
    account_id: int,
    body: RoleUpdateBody,
    admin: AdminAccount,
    accounts: Accounts,
    db: DbSession,
) -> DataResponse[AccountRead]:
    """Set another account's admin level and helper flag."""
    if account_id == admin.id:
        raise DomainError(MSG_OWN_ROLES, code="OWN_ROLES")
    if body.admin > admin.admin:
        raise DomainError(MSG_LEVEL_TOO_HIGH, code="LEVEL_TOO_HIGH")

    target = await accounts.get_by_id(account_id)
    if target is None:
        raise DomainError(MSG_UNKNOWN_ACCOUNT, code="NOT_FOUND")

    await accounts.set_roles(target, admin=body.admin, helper=body.helper)
    await db.commit()
    logger.info(
        "Admin %s set roles of account %s to admin=%s helper=%s",
        admin.id,
        target.id,
        body.admin,
        body.helper,
    )
    return DataResponse(data=AccountRead.model_validate(target))
