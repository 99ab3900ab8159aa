"""News request and response schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict

from ucp.schemas.fields import RequestModel, RequiredText, max_length

TITLE_MAX = 40


class NewsRead(BaseModel):
    """News article with author and editor names."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    image: str | None = None
    author_name: str | None = None
    editor_name: str | None = None
    created_at: datetime
    updated_at: datetime


class NewsWrite(RequestModel):
    """Body for POST /news and PUT /news/{id}."""

    title: Annotated[str, max_length(TITLE_MAX)]
    content: RequiredText
    image: str | None = None
