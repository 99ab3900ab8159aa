"""One-time codes for password reset and email verification.

A code is a random UUID4 string (122 random bits) that is emailed to the
account owner and stored only as a SHA-256 digest. A code is valid while a
row with its digest and the claimed purpose exists; consuming a purpose
deletes every row the account holds for it, so older links die with the
one that was used.

Route handlers apply the side effect (new password, verified flag) and call
consume() in the same session, then commit once.

Two hardening knobs exist, both off by default:
- ttl_minutes: codes older than this are treated as invalid.
- revoke_on_reissue: issuing a code deletes the account's earlier codes
  for the same purpose.
"""

import hashlib
import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Protocol

from ucp.core.config import settings
from ucp.models.one_time_code import CodePurpose, OneTimeCode

logger = logging.getLogger(__name__)


class CodeStore(Protocol):
    """Storage operations the service needs. OneTimeCodeRepository fits."""

    async def add(
        self, *, account_id: int, code_hash: str, purpose: str
    ) -> OneTimeCode: ...

    async def find(
        self,
        *,
        code_hash: str,
        purpose: str,
        issued_after: datetime | None = None,
    ) -> OneTimeCode | None: ...

    async def delete_for_account(self, *, account_id: int, purpose: str) -> int: ...


def hash_code(code: str) -> str:
    """SHA-256 hex digest of a plain code."""
    return hashlib.sha256(code.encode()).hexdigest()


class OneTimeCodeService:
    """Issues, looks up and consumes one-time codes.

    Args:
        store: Code storage, usually a OneTimeCodeRepository.
        ttl_minutes: Code lifetime. 0 disables expiry. Defaults to
            settings.one_time_code_ttl_minutes.
        revoke_on_reissue: Delete earlier same-purpose codes on issue.
            Defaults to settings.one_time_code_revoke_on_reissue.
    """

    def __init__(
        self,
        store: CodeStore,
        *,
        ttl_minutes: int | None = None,
        revoke_on_reissue: bool | None = None,
    ) -> None:
        self._store = store
        self._ttl_minutes = (
            settings.one_time_code_ttl_minutes if ttl_minutes is None else ttl_minutes
        )
        self._revoke_on_reissue = (
            settings.one_time_code_revoke_on_reissue
            if revoke_on_reissue is None
            else revoke_on_reissue
        )

    async def issue_code(self, account_id: int, purpose: CodePurpose) -> str:
        """Create and store a new code.

        Args:
            account_id: Account the code is bound to.
            purpose: Workflow the code authorizes.

        Returns:
            The plain code, to be emailed. It is not recoverable later.
        """
        if self._revoke_on_reissue:
            await self._store.delete_for_account(
                account_id=account_id, purpose=purpose.value
            )
        code = str(uuid.uuid4())
        await self._store.add(
            account_id=account_id,
            code_hash=hash_code(code),
            purpose=purpose.value,
        )
        logger.info("Issued %s code for account %s", purpose.value, account_id)
        return code

    async def find_valid(self, code: str, purpose: CodePurpose) -> OneTimeCode | None:
        """Look up a code issued for ``purpose``.

        Args:
            code: Plain code from the link.
            purpose: Workflow the caller is completing.

        Returns:
            The matching row, or None if the code is unknown, was issued
            for another purpose, was consumed, or has expired.
        """
        issued_after = None
        if self._ttl_minutes > 0:
            issued_after = datetime.now(UTC) - timedelta(minutes=self._ttl_minutes)
        return await self._store.find(
            code_hash=hash_code(code),
            purpose=purpose.value,
            issued_after=issued_after,
        )

    async def consume(self, account_id: int, purpose: CodePurpose) -> int:
        """Invalidate every code the account holds for ``purpose``.

        Args:
            account_id: Owning account.
            purpose: Workflow that just completed.

        Returns:
            Number of codes removed.
        """
        removed = await self._store.delete_for_account(
            account_id=account_id, purpose=purpose.value
        )
        logger.info(
            "Consumed %d %s code(s) for account %s", removed, purpose.value, account_id
        )
        return removed
