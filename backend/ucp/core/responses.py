"""Response envelope models.

Success bodies carry ``status: true``; error bodies carry a list of items
with ``status: false``. Clients check the flag before reading anything else.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class MessageResponse(BaseModel):
    """Envelope for actions that only report an outcome.

    Usage:
        return MessageResponse(msg="You have changed a new password.")
    """

    status: Literal[True] = True
    msg: str


class TokenResponse(BaseModel):
    """Envelope returned by login and registration."""

    status: Literal[True] = True
    token: str


class DataResponse(BaseModel, Generic[T]):
    """Envelope for single resources and plain lists.

    Usage:
        @router.get("/news/{slug}")
        async def get_news(slug: str) -> DataResponse[NewsRead]:
            return DataResponse(data=news)
    """

    status: Literal[True] = True
    data: T


class ErrorItem(BaseModel):
    """One entry in the error list.

    Attributes:
        code: Machine-readable error code.
        msg: Human-readable message.
        param: Offending request field (validation errors only).
        location: Where the field was read from (validation errors only).
    """

    status: Literal[False] = False
    code: str
    msg: str
    param: str | None = None
    location: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response envelope.

    Usage in exception handlers:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                errors=[ErrorItem(code=exc.code, msg=exc.message)]
            ).model_dump(exclude_none=True),
        )
    """

    errors: list[ErrorItem]
