"""Repository for OneTimeCode rows.

Stores SHA-256 digests only. Lookup is by exact (digest, purpose);
deletion is by (account, purpose).
"""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ucp.models.one_time_code import OneTimeCode


class OneTimeCodeRepository:
    """Repository for the ``user_sessions`` table.

    Bound to one AsyncSession; the caller owns the transaction boundary.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def add(
        self,
        *,
        account_id: int,
        code_hash: str,
        purpose: str,
    ) -> OneTimeCode:
        """Store a new code.

        Args:
            account_id: Owning account.
            code_hash: SHA-256 hex digest of the plain code.
            purpose: CodePurpose value.

        Returns:
            Created OneTimeCode.
        """
        row = OneTimeCode(account_id=account_id, code_hash=code_hash, purpose=purpose)
        self._db.add(row)
        await self._db.flush()
        await self._db.refresh(row)
        return row

    async def find(
        self,
        *,
        code_hash: str,
        purpose: str,
        issued_after: datetime | None = None,
    ) -> OneTimeCode | None:
        """Look up a code by digest and purpose.

        Args:
            code_hash: SHA-256 hex digest of the plain code.
            purpose: CodePurpose value the code must have been issued for.
            issued_after: If set, rows created at or before this instant
                are ignored.

        Returns:
            OneTimeCode if found, None otherwise.
        """
        stmt = select(OneTimeCode).where(
            OneTimeCode.code_hash == code_hash,
            OneTimeCode.purpose == purpose,
        )
        if issued_after is not None:
            stmt = stmt.where(OneTimeCode.created_at > issued_after)
        result = await self._db.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def delete_for_account(self, *, account_id: int, purpose: str) -> int:
        """Delete every code an account holds for one purpose.

        Args:
            account_id: Owning account.
            purpose: CodePurpose value.

        Returns:
            Number of deleted rows.
        """
        stmt = delete(OneTimeCode).where(
            OneTimeCode.account_id == account_id,
            OneTimeCode.purpose == purpose,
        )
        result = await self._db.execute(stmt)
        row_count: int = result.rowcount  # type: ignore[attr-defined]
        return row_count
