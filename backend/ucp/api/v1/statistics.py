"""Server statistics shown on the control panel dashboard."""

from fastapi import APIRouter

from ucp.api.deps import SessionClaimsDep, Statistics
from ucp.core.responses import DataResponse
from ucp.schemas.statistics import CountRead

router = APIRouter()


@router.get("/users")
async def count_users(
    _claims: SessionClaimsDep, stats: Statistics
) -> DataResponse[CountRead]:
    """Registered accounts."""
    return DataResponse(data=CountRead(count=await stats.count_accounts()))


@router.get("/player_vehicles")
async def count_player_vehicles(
    _claims: SessionClaimsDep, stats: Statistics
) -> DataResponse[CountRead]:
    """Player-owned vehicles."""
    return DataResponse(data=CountRead(count=await stats.count_owned_vehicles()))


@router.get("/player_properties")
async def count_player_properties(
    _claims: SessionClaimsDep, stats: Statistics
) -> DataResponse[CountRead]:
    """Player-owned properties."""
    return DataResponse(data=CountRead(count=await stats.count_owned_properties()))
