"""Character endpoints for the logged-in account.

List responses use the ``{count, rows}`` shape the frontend expects. The
sub-resource reads (admin warnings, inventory, vehicles, properties) only
answer for characters the caller owns; anything else reads as not found.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ucp.api.deps import (
    CharacterServiceDep,
    Characters,
    CurrentAccount,
    DbSession,
    json_body,
)
from ucp.core.errors import DomainError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.repositories.character_repository import CharacterRepository
from ucp.models.character import Character
from ucp.schemas.character import (
    AdminWarnRead,
    CharacterCreate,
    CharacterList,
    CharacterRead,
    FactionMemberRead,
    InventoryItemRead,
    PropertyRead,
    VehicleRead,
)
from ucp.services.character_service import MSG_NOT_FOUND

router = APIRouter()

MSG_DELETED = "Deleted character successfully."
MSG_FACTION_NOT_FOUND = "Faction members not found."

CreateBody = Annotated[CharacterCreate, Depends(json_body(CharacterCreate))]


async def _character_list(
    characters: CharacterRepository, account_id: int
) -> CharacterList:
    rows = await characters.list_for_account(account_id)
    return CharacterList(
        count=len(rows),
        rows=[CharacterRead.model_validate(row) for row in rows],
    )


@router.get("")
async def list_characters(
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[CharacterList]:
    """The account's characters with their factions."""
    return DataResponse(data=await _character_list(characters, account.id))


async def owned_character(
    characters: CharacterRepository, character_id: int, account_id: int
) -> Character:
    """The caller's character, or a 400 that does not reveal other owners."""
    character = await characters.get_owned(character_id, account_id)
    if character is None:
        raise DomainError(MSG_NOT_FOUND, code="NOT_FOUND")
    return character


@router.get("/faction/{faction_id}")
async def list_faction_members(
    faction_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[FactionMemberRead]]:
    """Members of a faction one of the caller's characters belongs to."""
    if faction_id < 1 or not await characters.in_faction(account.id, faction_id):
        raise DomainError(MSG_FACTION_NOT_FOUND, code="NOT_FOUND")
    members = await characters.list_faction_members(faction_id)
    return DataResponse(data=[FactionMemberRead.model_validate(m) for m in members])


@router.get("/{character_id}")
async def get_character(
    character_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[CharacterRead]:
    """One of the account's characters."""
    character = await owned_character(characters, character_id, account.id)
    return DataResponse(data=CharacterRead.model_validate(character))


@router.get("/{character_id}/admin_warn")
async def list_admin_warns(
    character_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[AdminWarnRead]]:
    """Admin warnings of one of the caller's characters, newest first."""
    await owned_character(characters, character_id, account.id)
    rows = await characters.list_admin_warns(character_id)
    return DataResponse(data=[AdminWarnRead.model_validate(r) for r in rows])


@router.get("/{character_id}/inventory")
async def list_inventory(
    character_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[InventoryItemRead]]:
    await owned_character(characters, character_id, account.id)
    rows = await characters.list_inventory(character_id)
    return DataResponse(data=[InventoryItemRead.model_validate(r) for r in rows])


@router.get("/{character_id}/vehicle")
async def list_vehicles(
    character_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[VehicleRead]]:
    """Vehicles of one of the caller's characters, most driven first."""
    await owned_character(characters, character_id, account.id)
    rows = await characters.list_vehicles(character_id)
    return DataResponse(data=[VehicleRead.model_validate(r) for r in rows])


@router.get("/{character_id}/property")
async def list_properties(
    character_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[PropertyRead]]:
    """Properties of one of the caller's characters, most expensive first."""
    await owned_character(characters, character_id, account.id)
    rows = await characters.list_properties(character_id)
    return DataResponse(data=[PropertyRead.model_validate(r) for r in rows])


@router.post("/new", status_code=201)
async def create_character(
    body: CreateBody,
    account: CurrentAccount,
    characters: Characters,
    service: CharacterServiceDep,
    db: DbSession,
) -> DataResponse[CharacterList]:
    """Create a character and return the refreshed list."""
    await service.create(
        account,
        firstname=body.firstname,
        lastname=body.lastname,
        gender=body.gender,
    )
    await db.commit()
    return DataResponse(data=await _character_list(characters, account.id))


@router.delete("/{character_id}", status_code=201)
async def delete_character(
    character_id: int,
    account: CurrentAccount,
    service: CharacterServiceDep,
    db: DbSession,
) -> MessageResponse:
    """Delete one of the account's characters."""
    await service.delete(account, character_id)
    await db.commit()
    return MessageResponse(msg=MSG_DELETED)
