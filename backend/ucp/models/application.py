"""Whitelist application model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucp.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ucp.models.account import Account
    from ucp.models.quiz import Quiz


class UserApplication(Base, TimestampMixin):
    """A player's whitelist application and its review outcome.

    Attributes:
        id: Integer primary key.
        account_id: Applicant (``user_id`` column).
        reviewer_id: Admin who reviewed it (``admin_id`` column).
        quiz_id: Quiz question the free-text answer responds to.
        score: Multiple-choice score.
        answer: Free-text answer.
        status: ApplicationStatus value.
        reason: Reviewer's reason, sent to the applicant.
    """

    __tablename__ = "user_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reviewer_id: Mapped[int | None] = mapped_column(
        "admin_id",
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    quiz_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("quizzes.id", ondelete="SET NULL"),
        nullable=True,
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    applicant: Mapped["Account"] = relationship(
        foreign_keys="UserApplication.account_id", lazy="raise"
    )
    reviewer: Mapped["Account | None"] = relationship(
        foreign_keys="UserApplication.reviewer_id", lazy="raise"
    )
    quiz: Mapped["Quiz | None"] = relationship(lazy="raise")

    @property
    def applicant_name(self) -> str | None:
        """Applicant's account name. Requires ``applicant`` to be loaded."""
        return self.applicant.name if self.applicant else None

    @property
    def reviewer_name(self) -> str | None:
        """Reviewer's account name. Requires ``reviewer`` to be loaded."""
        return self.reviewer.name if self.reviewer else None

    @property
    def question(self) -> str | None:
        """Quiz question text. Requires ``quiz`` to be loaded."""
        return self.quiz.question if self.quiz else None
