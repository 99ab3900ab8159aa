"""Quiz request and response schemas.

Applicants get QuizRead, whose answers carry no correct_answer flag.
Administrators get QuizAnswerRead, which does.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ucp.schemas.fields import Flag, Numeric, RequestModel, RequiredText, max_length

ANSWER_MAX = 100
QUIZ_TYPE_NAME_MAX = 64


class QuizTypeRead(BaseModel):
    """Quiz category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    active: bool


class QuizTypeWrite(RequestModel):
    """Body for POST /quiz/type and PUT /quiz/type/{id}."""

    name: Annotated[str, max_length(QUIZ_TYPE_NAME_MAX)]
    active: Flag = True


class AnswerOption(BaseModel):
    """Answer option as shown to applicants."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    answer: str


class QuizRead(BaseModel):
    """Question with its answer options, safe to show applicants."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_type_id: int
    question: str
    image: str | None = None
    answers: list[AnswerOption]


class QuizCreate(RequestModel):
    """Body for POST /quiz."""

    quiz_type_id: Numeric
    question: RequiredText
    image: str | None = None


class QuizCreated(BaseModel):
    """Question as stored, returned to the admin who created it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_type_id: int
    question: str
    image: str | None = None


class QuizAnswerRead(BaseModel):
    """Answer option including the correct flag (admin only)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    answer: str
    correct_answer: bool


class QuizAnswerWrite(RequestModel):
    """One answer option."""

    quiz_id: Numeric
    answer: Annotated[str, max_length(ANSWER_MAX)]
    correct_answer: Flag = False


class QuizAnswerBulkCreate(RequestModel):
    """Body for POST /quiz/answer."""

    answers: list[QuizAnswerWrite] = Field(min_length=1)


class QuizAnswerUpdate(RequestModel):
    """Body for PUT /quiz/answer/{id}."""

    answer: Annotated[str, max_length(ANSWER_MAX)]
    correct_answer: Flag = False
