"""Repository for Account CRUD operations.

Provides database access for the shared ``users`` table. Handles are
compared exactly; email addresses are stored and matched lowercase.
"""

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ucp.models.account import Account

# Fields that may be updated via AccountRepository.update().
# Security: 'id', 'name' and 'registered_at' are immutable here.
# 'admin' and 'helper' are excluded to prevent mass-assignment privilege
# escalation; use set_roles() from the admin-only route instead.
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "email",
        "email_verified",
        "password_hash",
        "status",
        "ucp_login_ip",
        "delay_character_deletion",
    }
)


class AccountRepository:
    """Repository for Account table operations.

    Bound to one AsyncSession; the caller owns the transaction boundary.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_by_id(self, account_id: int) -> Account | None:
        """Fetch an account by primary key.

        Args:
            account_id: Integer primary key.

        Returns:
            Account if found, None otherwise.
        """
        return await self._db.get(Account, account_id)

    async def get_by_name(self, name: str) -> Account | None:
        """Fetch an account by handle (exact match)."""
        stmt = select(Account).where(Account.name == name)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email address (case-insensitive)."""
        stmt = select(Account).where(Account.email == email.lower())
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name_or_email(self, usermail: str) -> Account | None:
        """Fetch the account whose handle or email matches ``usermail``.

        Handles may not contain '@', so at most one row can match.
        """
        stmt = select(Account).where(
            or_(Account.name == usermail, Account.email == usermail.lower())
        )
        result = await self._db.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        register_ip: str | None = None,
    ) -> Account:
        """Create a new account.

        Args:
            name: Unique handle.
            email: Unique email address, normalized to lowercase.
            password_hash: bcrypt hash.
            register_ip: Client address at registration.

        Returns:
            Created Account with database-generated fields populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If name or email already exists.
        """
        account = Account(
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            register_ip=register_ip,
            ucp_login_ip=register_ip,
        )
        self._db.add(account)
        await self._db.flush()
        await self._db.refresh(account)
        return account

    async def update(
        self,
        account: Account,
        **kwargs: str | int | bool | datetime | None,
    ) -> Account:
        """Update account fields.

        Only fields in _UPDATABLE_FIELDS are allowed.

        Args:
            account: Account to modify.
            **kwargs: Field names and new values.

        Returns:
            The updated Account.

        Raises:
            ValueError: If a field is not updatable.
        """
        invalid = set(kwargs) - _UPDATABLE_FIELDS
        if invalid:
            msg = f"Cannot update fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        for key, value in kwargs.items():
            if key == "email" and isinstance(value, str):
                value = value.lower()
            setattr(account, key, value)

        await self._db.flush()
        return account

    async def set_roles(self, account: Account, *, admin: int, helper: bool) -> Account:
        """Change an account's role flags.

        Admin-only operation, separate from update() to prevent
        mass-assignment privilege escalation. The caller enforces who may
        grant what.
        """
        account.admin = admin
        account.helper = helper
        await self._db.flush()
        return account
