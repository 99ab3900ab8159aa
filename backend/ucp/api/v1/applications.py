"""Whitelist applications.

Players submit one application at a time; admins review it and the player
is told the outcome by email. The account's status column mirrors the
latest application's status.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ucp.api.deps import (
    Accounts,
    AdminAccount,
    Applications,
    CurrentAccount,
    DbSession,
    Mailer,
    Quizzes,
    json_body,
)
from ucp.core.email import compose_application_reviewed
from ucp.core.errors import DomainError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.models.account import ApplicationStatus
from ucp.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationReview,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_SUBMITTED = "Application submitted."
MSG_ALREADY_PENDING = "You already have an application waiting for review."
MSG_ALREADY_APPROVED = "Your account is already whitelisted."
MSG_UNKNOWN_QUIZ = "The quiz you've answered does not exist."
MSG_UNKNOWN_APPLICATION = (
    "The id of user application you've selected does not exist."
)
MSG_ALREADY_REVIEWED = "That application has already been reviewed."

_REVIEW_STATUS = {
    "approved": ApplicationStatus.APPROVED,
    "denied": ApplicationStatus.DENIED,
}

CreateBody = Annotated[ApplicationCreate, Depends(json_body(ApplicationCreate))]
ReviewBody = Annotated[ApplicationReview, Depends(json_body(ApplicationReview))]


@router.post("/application", status_code=201)
async def submit_application(
    body: CreateBody,
    account: CurrentAccount,
    accounts: Accounts,
    applications: Applications,
    quizzes: Quizzes,
    db: DbSession,
) -> MessageResponse:
    """Submit a whitelist application and mark the account pending."""
    if account.status == ApplicationStatus.PENDING:
        raise DomainError(MSG_ALREADY_PENDING, code="APPLICATION_PENDING")
    if account.status == ApplicationStatus.APPROVED:
        raise DomainError(MSG_ALREADY_APPROVED, code="ALREADY_APPROVED")
    if await quizzes.get_quiz(body.quiz_id) is None:
        raise DomainError(MSG_UNKNOWN_QUIZ, code="NOT_FOUND")

    await applications.create(
        account_id=account.id,
        quiz_id=body.quiz_id,
        score=body.score,
        answer=body.answer,
        status=ApplicationStatus.PENDING,
    )
    await accounts.update(account, status=ApplicationStatus.PENDING)
    await db.commit()
    logger.info("Account %s submitted an application", account.id)
    return MessageResponse(msg=MSG_SUBMITTED)


@router.get("/application")
async def list_applications(
    _admin: AdminAccount,
    applications: Applications,
) -> DataResponse[list[ApplicationRead]]:
    """All applications, newest first (admin)."""
    rows = await applications.list_latest()
    return DataResponse(data=[ApplicationRead.model_validate(r) for r in rows])


@router.put("/application/{application_id}", status_code=201)
async def review_application(
    application_id: int,
    body: ReviewBody,
    admin: AdminAccount,
    accounts: Accounts,
    applications: Applications,
    mailer: Mailer,
    db: DbSession,
) -> DataResponse[ApplicationRead]:
    """Approve or deny a pending application and email the applicant."""
    application = await applications.get_by_id(application_id)
    if application is None:
        raise DomainError(MSG_UNKNOWN_APPLICATION, code="NOT_FOUND")
    if application.status != ApplicationStatus.PENDING:
        raise DomainError(MSG_ALREADY_REVIEWED, code="ALREADY_REVIEWED")

    status = _REVIEW_STATUS[body.status]
    applicant = await accounts.get_by_id(application.account_id)
    if applicant is None:
        raise DomainError(MSG_UNKNOWN_APPLICATION, code="NOT_FOUND")

    application = await applications.review(
        application, reviewer_id=admin.id, status=status, reason=body.reason
    )
    await accounts.update(applicant, status=status)
    subject, html = compose_application_reviewed(
        name=applicant.name,
        approved=status == ApplicationStatus.APPROVED,
        reason=body.reason,
    )
    await mailer.send(to_email=applicant.email, subject=subject, html=html)
    await db.commit()
    logger.info(
        "Admin %s %s application %s", admin.id, body.status, application.id
    )
    return DataResponse(data=ApplicationRead.model_validate(application))
