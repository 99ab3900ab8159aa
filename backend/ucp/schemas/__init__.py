"""Pydantic request/response schemas for API endpoints."""

from ucp.schemas.account import (
    AccountRead,
    ChangeEmailRequest,
    ChangePasswordRequest,
    RoleUpdateRequest,
)
from ucp.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationReview,
)
from ucp.schemas.auth import (
    LoginRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
)
from ucp.schemas.ban import BanRead
from ucp.schemas.character import (
    CharacterCreate,
    CharacterList,
    CharacterRead,
    FactionRead,
)
from ucp.schemas.news import NewsRead, NewsWrite
from ucp.schemas.quiz import (
    AnswerOption,
    QuizAnswerBulkCreate,
    QuizAnswerRead,
    QuizAnswerUpdate,
    QuizAnswerWrite,
    QuizCreate,
    QuizCreated,
    QuizRead,
    QuizTypeRead,
    QuizTypeWrite,
)
from ucp.schemas.statistics import CountRead

__all__ = [
    "AccountRead",
    "AnswerOption",
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationReview",
    "BanRead",
    "ChangeEmailRequest",
    "ChangePasswordRequest",
    "CharacterCreate",
    "CharacterList",
    "CharacterRead",
    "CountRead",
    "FactionRead",
    "LoginRequest",
    "NewsRead",
    "NewsWrite",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "QuizAnswerBulkCreate",
    "QuizAnswerRead",
    "QuizAnswerUpdate",
    "QuizAnswerWrite",
    "QuizCreate",
    "QuizCreated",
    "QuizRead",
    "QuizTypeRead",
    "QuizTypeWrite",
    "RegisterRequest",
    "RoleUpdateRequest",
]
