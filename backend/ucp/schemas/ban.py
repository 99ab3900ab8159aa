"""Ban response schema."""

from pydantic import BaseModel, ConfigDict


class BanRead(BaseModel):
    """Ban as listed for administrators."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    account: str
    issuer: str
    reason: str
    timestamp: int
    timestamp_expired: int
