"""Character request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from ucp.schemas.fields import NamePart, Numeric, RequestModel


class FactionRead(BaseModel):
    """Faction summary embedded in a character."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    alias: str | None = None


class CharacterRead(BaseModel):
    """Character summary shown on the control panel."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    gender: int
    skin_id: int
    level: int
    money: int
    bank: int
    faction: FactionRead | None = None


class CharacterList(BaseModel):
    """Characters of one account with their total."""

    count: int
    rows: list[CharacterRead]


class CharacterCreate(RequestModel):
    """Body for POST /characters/new.

    Gender is 0 for male and 1 for female.
    """

    firstname: NamePart
    lastname: NamePart
    gender: Numeric = Field(ge=0, le=1)


class FactionMemberRead(BaseModel):
    """Public view of a fellow faction member."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    level: int
    skin_id: int


class AdminWarnRead(BaseModel):
    """Admin warning on a character."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: int
    type: int
    issuer: str
    reason: str


class InventoryItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    amount: int


class VehicleRead(BaseModel):
    """Vehicle owned by a character."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    model: int
    name: str | None = None
    number_plate: str | None = None
    color_1: int
    color_2: int
    health: float
    max_health: float
    mileage: float
    fuel: float
    lock_status: int


class PropertyOwnerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class PropertyRead(BaseModel):
    """Property owned by a character, with the owner's name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: int
    level: int
    price: int
    address_number: int | None = None
    address_name: str | None = None
    lock_status: int
    owner: PropertyOwnerRead | None = None
