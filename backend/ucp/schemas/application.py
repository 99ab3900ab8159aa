"""Whitelist application request and response schemas."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict

from ucp.schemas.fields import Numeric, RequestModel, RequiredText, max_length

REASON_MAX = 255


class ApplicationCreate(RequestModel):
    """Body for POST /users/application."""

    quiz_id: Numeric
    score: Numeric
    answer: RequiredText


class ApplicationReview(RequestModel):
    """Body for PUT /users/application/{id}."""

    status: Literal["approved", "denied"]
    reason: Annotated[str, max_length(REASON_MAX)]


class ApplicationRead(BaseModel):
    """Application as listed for reviewers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    applicant_name: str | None = None
    reviewer_name: str | None = None
    quiz_id: int | None = None
    question: str | None = None
    score: int
    answer: str
    status: int
    reason: str | None = None
    created_at: datetime
    updated_at: datetime
