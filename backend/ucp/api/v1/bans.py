"""Ban administration (admin only)."""

import logging

from fastapi import APIRouter

from ucp.api.deps import AdminAccount, Bans, DbSession
from ucp.core.errors import DomainError
from ucp.core.responses import DataResponse, MessageResponse
from ucp.schemas.ban import BanRead

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_NOT_FOUND = "The ban you've selected does not exist."
MSG_DELETED = "Deleted ban successfully."


@router.get("")
async def list_bans(
    _admin: AdminAccount,
    bans: Bans,
) -> DataResponse[list[BanRead]]:
    """All bans, newest first."""
    rows = await bans.list_latest()
    return DataResponse(data=[BanRead.model_validate(row) for row in rows])


@router.delete("/{ban_id}", status_code=201)
async def delete_ban(
    ban_id: int,
    admin: AdminAccount,
    bans: Bans,
    db: DbSession,
) -> MessageResponse:
    """Lift a ban."""
    ban = await bans.get_by_id(ban_id)
    if ban is None:
        raise DomainError(MSG_NOT_FOUND, code="NOT_FOUND")
    await bans.delete(ban)
    await db.commit()
    logger.info("Admin %s lifted ban %s on %s", admin.id, ban.id, ban.account)
    return MessageResponse(msg=MSG_DELETED)
