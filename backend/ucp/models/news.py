"""News model - announcements shown on the control panel front page."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucp.models.base import AuthorMixin, Base, TimestampMixin

if TYPE_CHECKING:
    from ucp.models.account import Account


class News(Base, TimestampMixin, AuthorMixin):
    """News article.

    Attributes:
        id: Integer primary key.
        title: Headline (max 40 characters).
        slug: URL slug derived from the title.
        content: Article body.
        image: Optional image path (upload handling lives elsewhere).
        author: Account that wrote the article.
        editor: Account that last edited it.
    """

    __tablename__ = "news"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(40), nullable=False)
    slug: Mapped[str] = mapped_column(String(55), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(100), nullable=True)

    author: Mapped["Account | None"] = relationship(
        foreign_keys="News.created_by", lazy="raise"
    )
    editor: Mapped["Account | None"] = relationship(
        foreign_keys="News.updated_by", lazy="raise"
    )

    @property
    def author_name(self) -> str | None:
        """Name of the author. Requires ``author`` to be loaded."""
        return self.author.name if self.author else None

    @property
    def editor_name(self) -> str | None:
        """Name of the last editor. Requires ``editor`` to be loaded."""
        return self.editor.name if self.editor else None
