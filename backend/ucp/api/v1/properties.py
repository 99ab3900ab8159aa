"""Property lookup by owning character.

Same data as ``GET /characters/{id}/property``, kept under its own path for
the property pages of the frontend.
"""

from fastapi import APIRouter

from ucp.api.deps import Characters, CurrentAccount
from ucp.api.v1.characters import list_properties
from ucp.core.responses import DataResponse
from ucp.schemas.character import PropertyRead

router = APIRouter()


@router.get("/{owner_id}")
async def list_owner_properties(
    owner_id: int,
    account: CurrentAccount,
    characters: Characters,
) -> DataResponse[list[PropertyRead]]:
    """Properties of one of the caller's characters with the owner's name."""
    return await list_properties(owner_id, account, characters)
