"""Whitelist quiz models.

A QuizType groups questions; only active types are served to applicants.
Each Quiz is one question with several QuizAnswer options, some of which
are flagged correct.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucp.models.base import AuthorMixin, Base, TimestampMixin


class QuizType(Base, TimestampMixin, AuthorMixin):
    """Question category.

    Attributes:
        id: Integer primary key.
        name: Display name.
        active: Whether applicants are served questions of this type.
    """

    __tablename__ = "quiz_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    quizzes: Mapped[list["Quiz"]] = relationship(
        back_populates="quiz_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )


class Quiz(Base, TimestampMixin, AuthorMixin):
    """One quiz question.

    Attributes:
        id: Integer primary key.
        quiz_type_id: Owning QuizType.
        question: Question text.
        image: Optional image path.
    """

    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quiz_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quiz_types.id", ondelete="CASCADE"),
        nullable=False,
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(100), nullable=True)

    quiz_type: Mapped[QuizType] = relationship(
        back_populates="quizzes", lazy="raise"
    )
    answers: Mapped[list["QuizAnswer"]] = relationship(
        back_populates="quiz",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="QuizAnswer.id",
        lazy="raise",
    )


class QuizAnswer(Base, TimestampMixin, AuthorMixin):
    """Answer option for a quiz question.

    Attributes:
        id: Integer primary key.
        quiz_id: Owning Quiz.
        answer: Answer text.
        correct_answer: Whether this option is correct. Never sent to
            applicants.
    """

    __tablename__ = "quiz_answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quiz_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
    )
    answer: Mapped[str] = mapped_column(String(100), nullable=False)
    correct_answer: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    quiz: Mapped[Quiz] = relationship(back_populates="answers", lazy="raise")
