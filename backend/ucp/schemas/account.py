"""Account read model and self-service request schemas.

AccountRead is the only shape an account is ever serialized in. It has no
password field, so the hash cannot leak through a response.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ucp.schemas.fields import Email, Flag, Password, RequestModel, Secret

MAX_ADMIN_LEVEL = 10


class AccountRead(BaseModel):
    """Public view of an account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    email_verified: bool
    admin: int
    helper: bool
    status: int
    registered_at: datetime | None = None


class ChangePasswordRequest(RequestModel):
    """Body for PUT /users/change/password."""

    old_password: Secret
    password: Password


class ChangeEmailRequest(RequestModel):
    """Body for PUT /users/change/email."""

    new_email: Email


class RoleUpdateRequest(RequestModel):
    """Body for PUT /users/{account_id}/roles."""

    admin: int = Field(ge=0, le=MAX_ADMIN_LEVEL, strict=True)
    helper: Flag
