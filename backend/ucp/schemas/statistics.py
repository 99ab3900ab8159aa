"""Server statistics response schema."""

from pydantic import BaseModel


class CountRead(BaseModel):
    """A single count."""

    count: int
