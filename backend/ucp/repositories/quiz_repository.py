"""Repository for quiz types, questions and answer options."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ucp.models.quiz import Quiz, QuizAnswer, QuizType


class QuizRepository:
    """Repository for the ``quiz_types``, ``quizzes`` and ``quiz_answers`` tables.

    Deleting a type or a question removes its children through the
    database's ON DELETE CASCADE.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # ----- Quiz types -----

    async def list_types(self) -> list[QuizType]:
        """All quiz types in creation order."""
        result = await self._db.execute(select(QuizType).order_by(QuizType.id))
        return list(result.scalars().all())

    async def get_type(self, type_id: int) -> QuizType | None:
        """Fetch a quiz type by id."""
        return await self._db.get(QuizType, type_id)

    async def create_type(self, *, name: str, active: bool, author_id: int) -> QuizType:
        """Create a quiz type."""
        quiz_type = QuizType(name=name, active=active, created_by=author_id)
        self._db.add(quiz_type)
        await self._db.flush()
        await self._db.refresh(quiz_type)
        return quiz_type

    async def update_type(
        self, quiz_type: QuizType, *, name: str, active: bool, editor_id: int
    ) -> QuizType:
        """Rename or (de)activate a quiz type."""
        quiz_type.name = name
        quiz_type.active = active
        quiz_type.updated_by = editor_id
        await self._db.flush()
        await self._db.refresh(quiz_type)
        return quiz_type

    async def delete_type(self, quiz_type: QuizType) -> None:
        """Delete a quiz type with its questions."""
        await self._db.delete(quiz_type)
        await self._db.flush()

    # ----- Questions -----

    async def list_active_quizzes(self) -> list[Quiz]:
        """Questions of active types with their answer options."""
        stmt = (
            select(Quiz)
            .join(Quiz.quiz_type)
            .where(QuizType.active.is_(True))
            .options(selectinload(Quiz.answers))
            .order_by(Quiz.id)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get_quiz(self, quiz_id: int) -> Quiz | None:
        """Fetch a question by id."""
        return await self._db.get(Quiz, quiz_id)

    async def create_quiz(
        self,
        *,
        quiz_type_id: int,
        question: str,
        image: str | None,
        author_id: int,
    ) -> Quiz:
        """Create a question."""
        quiz = Quiz(
            quiz_type_id=quiz_type_id,
            question=question,
            image=image,
            created_by=author_id,
        )
        self._db.add(quiz)
        await self._db.flush()
        await self._db.refresh(quiz)
        return quiz

    async def delete_quiz(self, quiz: Quiz) -> None:
        """Delete a question with its answer options."""
        await self._db.delete(quiz)
        await self._db.flush()

    # ----- Answer options -----

    async def existing_quiz_ids(self, quiz_ids: set[int]) -> set[int]:
        """Subset of ``quiz_ids`` that refer to existing questions."""
        if not quiz_ids:
            return set()
        result = await self._db.execute(select(Quiz.id).where(Quiz.id.in_(quiz_ids)))
        return set(result.scalars().all())

    async def create_answers(
        self,
        answers: list[tuple[int, str, bool]],
        *,
        author_id: int,
    ) -> list[QuizAnswer]:
        """Bulk-create answer options.

        Args:
            answers: (quiz_id, answer, correct_answer) tuples.
            author_id: Admin creating the options.

        Returns:
            Created QuizAnswer rows in input order.
        """
        rows = [
            QuizAnswer(
                quiz_id=quiz_id,
                answer=answer,
                correct_answer=correct,
                created_by=author_id,
            )
            for quiz_id, answer, correct in answers
        ]
        self._db.add_all(rows)
        await self._db.flush()
        return rows

    async def get_answer(self, answer_id: int) -> QuizAnswer | None:
        """Fetch an answer option by id."""
        return await self._db.get(QuizAnswer, answer_id)

    async def update_answer(
        self,
        row: QuizAnswer,
        *,
        answer: str,
        correct_answer: bool,
        editor_id: int,
    ) -> QuizAnswer:
        """Edit an answer option."""
        row.answer = answer
        row.correct_answer = correct_answer
        row.updated_by = editor_id
        await self._db.flush()
        await self._db.refresh(row)
        return row

    async def delete_answer(self, row: QuizAnswer) -> None:
        """Delete an answer option."""
        await self._db.delete(row)
        await self._db.flush()
