"""Whitelist quiz endpoints.

Applicants fetch the active questions with answer options but never the
correct-answer flags. Everything else is admin-only.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ucp.api.deps import (
    AdminAccount,
    CurrentAccount,
    DbSession,
    Quizzes,
    json_body,
)
from ucp.core.errors import DomainError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.schemas.quiz import (
    QuizAnswerBulkCreate,
    QuizAnswerRead,
    QuizAnswerUpdate,
    QuizCreate,
    QuizCreated,
    QuizRead,
    QuizTypeRead,
    QuizTypeWrite,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_TYPE_NOT_FOUND = "The quiz type you've selected does not exist."
MSG_QUIZ_NOT_FOUND = "The quiz you've selected does not exist."
MSG_ANSWER_NOT_FOUND = "The quiz answer you've selected does not exist."
MSG_TYPE_DELETED = "Deleted quiz type successfully."
MSG_QUIZ_DELETED = "Deleted quiz successfully."
MSG_ANSWER_DELETED = "Deleted quiz answer successfully."

TypeBody = Annotated[QuizTypeWrite, Depends(json_body(QuizTypeWrite))]
QuizBody = Annotated[QuizCreate, Depends(json_body(QuizCreate))]
AnswersBody = Annotated[QuizAnswerBulkCreate, Depends(json_body(QuizAnswerBulkCreate))]
AnswerBody = Annotated[QuizAnswerUpdate, Depends(json_body(QuizAnswerUpdate))]


# ===================================================================
# Quiz types
# ===================================================================


@router.get("/type")
async def list_quiz_types(
    _admin: AdminAccount,
    quizzes: Quizzes,
) -> DataResponse[list[QuizTypeRead]]:
    """All quiz types."""
    rows = await quizzes.list_types()
    return DataResponse(data=[QuizTypeRead.model_validate(row) for row in rows])


@router.post("/type", status_code=201)
async def create_quiz_type(
    body: TypeBody,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> DataResponse[QuizTypeRead]:
    """Create a quiz type."""
    quiz_type = await quizzes.create_type(
        name=body.name, active=body.active, author_id=admin.id
    )
    await db.commit()
    return DataResponse(data=QuizTypeRead.model_validate(quiz_type))


@router.put("/type/{type_id}", status_code=201)
async def update_quiz_type(
    type_id: int,
    body: TypeBody,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> DataResponse[QuizTypeRead]:
    """Rename or (de)activate a quiz type."""
    quiz_type = await quizzes.get_type(type_id)
    if quiz_type is None:
        raise DomainError(MSG_TYPE_NOT_FOUND, code="NOT_FOUND")
    quiz_type = await quizzes.update_type(
        quiz_type, name=body.name, active=body.active, editor_id=admin.id
    )
    await db.commit()
    return DataResponse(data=QuizTypeRead.model_validate(quiz_type))


@router.delete("/type/{type_id}", status_code=201)
async def delete_quiz_type(
    type_id: int,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> MessageResponse:
    """Delete a quiz type with its questions and answers."""
    quiz_type = await quizzes.get_type(type_id)
    if quiz_type is None:
        raise DomainError(MSG_TYPE_NOT_FOUND, code="NOT_FOUND")
    await quizzes.delete_type(quiz_type)
    await db.commit()
    logger.info("Admin %s deleted quiz type %s", admin.id, type_id)
    return MessageResponse(msg=MSG_TYPE_DELETED)


# ===================================================================
# Questions
# ===================================================================


@router.get("")
async def list_quizzes(
    _account: CurrentAccount,
    quizzes: Quizzes,
) -> DataResponse[list[QuizRead]]:
    """Active questions with answer options, without correct flags."""
    rows = await quizzes.list_active_quizzes()
    return DataResponse(data=[QuizRead.model_validate(row) for row in rows])


@router.post("", status_code=201)
async def create_quiz(
    body: QuizBody,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> DataResponse[QuizCreated]:
    """Add a question to a quiz type."""
    if await quizzes.get_type(body.quiz_type_id) is None:
        raise DomainError(MSG_TYPE_NOT_FOUND, code="NOT_FOUND")
    quiz = await quizzes.create_quiz(
        quiz_type_id=body.quiz_type_id,
        question=body.question,
        image=body.image,
        author_id=admin.id,
    )
    await db.commit()
    return DataResponse(data=QuizCreated.model_validate(quiz))


@router.delete("/{quiz_id}", status_code=201)
async def delete_quiz(
    quiz_id: int,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> MessageResponse:
    """Delete a question with its answer options."""
    quiz = await quizzes.get_quiz(quiz_id)
    if quiz is None:
        raise DomainError(MSG_QUIZ_NOT_FOUND, code="NOT_FOUND")
    await quizzes.delete_quiz(quiz)
    await db.commit()
    logger.info("Admin %s deleted quiz %s", admin.id, quiz_id)
    return MessageResponse(msg=MSG_QUIZ_DELETED)


# ===================================================================
# Answer options
# ===================================================================


@router.post("/answer", status_code=201)
async def create_answers(
    body: AnswersBody,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> DataResponse[list[QuizAnswerRead]]:
    """Bulk-create answer options. All referenced questions must exist."""
    wanted = {item.quiz_id for item in body.answers}
    if await quizzes.existing_quiz_ids(wanted) != wanted:
        raise DomainError(MSG_QUIZ_NOT_FOUND, code="NOT_FOUND")

    rows = await quizzes.create_answers(
        [(item.quiz_id, item.answer, item.correct_answer) for item in body.answers],
        author_id=admin.id,
    )
    await db.commit()
    return DataResponse(data=[QuizAnswerRead.model_validate(row) for row in rows])


@router.put("/answer/{answer_id}", status_code=201)
async def update_answer(
    answer_id: int,
    body: AnswerBody,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> DataResponse[QuizAnswerRead]:
    """Edit an answer option."""
    row = await quizzes.get_answer(answer_id)
    if row is None:
        raise DomainError(MSG_ANSWER_NOT_FOUND, code="NOT_FOUND")
    row = await quizzes.update_answer(
        row,
        answer=body.answer,
        correct_answer=body.correct_answer,
        editor_id=admin.id,
    )
    await db.commit()
    return DataResponse(data=QuizAnswerRead.model_validate(row))


@router.delete("/answer/{answer_id}", status_code=201)
async def delete_answer(
    answer_id: int,
    admin: AdminAccount,
    quizzes: Quizzes,
    db: DbSession,
) -> MessageResponse:
    """Delete an answer option."""
    row = await quizzes.get_answer(answer_id)
    if row is None:
        raise DomainError(MSG_ANSWER_NOT_FOUND, code="NOT_FOUND")
    await quizzes.delete_answer(row)
    await db.commit()
    logger.info("Admin %s deleted quiz answer %s", admin.id, answer_id)
    return MessageResponse(msg=MSG_ANSWER_DELETED)
