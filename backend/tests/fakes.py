"""In-memory doubles for repositories, the mailer and the DB session.

They implement the same async methods the routes call, so unit tests can
run the real routers through app.dependency_overrides without PostgreSQL.
"""

from datetime import UTC, datetime

from ucp.core.errors import MailDeliveryError
from ucp.core.security import hash_password
from ucp.models.account import Account, ApplicationStatus
from ucp.models.one_time_code import OneTimeCode

_TEST_BCRYPT_ROUNDS = 4


def make_account(
    account_id: int | None,
    *,
    name: str = "player_one",
    email: str = "player@example.com",
    password: str = "secret123",  # nosec B107
    email_verified: bool = True,
    admin: int = 0,
    helper: bool = False,
) -> Account:
    """Build a transient Account with every column populated.

    Pass None as account_id to let the database assign one.
    """
    return Account(
        id=account_id,
        name=name,
        email=email.lower(),
        email_verified=email_verified,
        password_hash=hash_password(password, rounds=_TEST_BCRYPT_ROUNDS),
        admin=admin,
        helper=helper,
        status=ApplicationStatus.UNSET,
        register_ip=None,
        ucp_login_ip=None,
        delay_character_deletion=None,
        registered_at=datetime.now(UTC),
    )


class InMemoryAccountRepository:
    """Dict-backed stand-in for AccountRepository."""

    def __init__(self, *accounts: Account) -> None:
        self.rows: dict[int, Account] = {a.id: a for a in accounts}
        self.calls = 0

    def add(self, account: Account) -> Account:
        self.rows[account.id] = account
        return account

    async def get_by_id(self, account_id: int) -> Account | None:
        self.calls += 1
        return self.rows.get(account_id)

    async def get_by_name(self, name: str) -> Account | None:
        self.calls += 1
        return next((a for a in self.rows.values() if a.name == name), None)

    async def get_by_email(self, email: str) -> Account | None:
        self.calls += 1
        return next(
            (a for a in self.rows.values() if a.email == email.lower()), None
        )

    async def get_by_name_or_email(self, usermail: str) -> Account | None:
        self.calls += 1
        return next(
            (
                a
                for a in self.rows.values()
                if a.name == usermail or a.email == usermail.lower()
            ),
            None,
        )

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        register_ip: str | None = None,
    ) -> Account:
        self.calls += 1
        account = make_account(max(self.rows, default=0) + 1, name=name, email=email)
        account.password_hash = password_hash
        account.email_verified = False
        account.register_ip = register_ip
        account.ucp_login_ip = register_ip
        return self.add(account)

    async def update(self, account: Account, **kwargs: object) -> Account:
        self.calls += 1
        for key, value in kwargs.items():
            if key == "email" and isinstance(value, str):
                value = value.lower()
            setattr(account, key, value)
        return account

    async def set_roles(self, account: Account, *, admin: int, helper: bool) -> Account:
        self.calls += 1
        account.admin = admin
        account.helper = helper
        return account


class InMemoryCodeStore:
    """List-backed stand-in for OneTimeCodeRepository."""

    def __init__(self) -> None:
        self.rows: list[OneTimeCode] = []
        self._next_id = 1

    async def add(
        self, *, account_id: int, code_hash: str, purpose: str
    ) -> OneTimeCode:
        row = OneTimeCode(
            id=self._next_id,
            account_id=account_id,
            code_hash=code_hash,
            purpose=purpose,
            created_at=datetime.now(UTC),
        )
        self._next_id += 1
        self.rows.append(row)
        return row

    async def find(
        self,
        *,
        code_hash: str,
        purpose: str,
        issued_after: datetime | None = None,
    ) -> OneTimeCode | None:
        for row in self.rows:
            if row.code_hash != code_hash or row.purpose != purpose:
                continue
            if issued_after is not None and row.created_at <= issued_after:
                continue
            return row
        return None

    async def delete_for_account(self, *, account_id: int, purpose: str) -> int:
        keep = [
            r
            for r in self.rows
            if not (r.account_id == account_id and r.purpose == purpose)
        ]
        removed = len(self.rows) - len(keep)
        self.rows = keep
        return removed


class RecordingEmailSender:
    """Mailer double that records messages instead of sending them."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail = fail

    async def send(self, *, to_email: str, subject: str, html: str) -> None:
        if self.fail:
            raise MailDeliveryError()
        self.sent.append({"to_email": to_email, "subject": subject, "html": html})


class FakeSession:
    """Counts commits and rollbacks; everything else is a no-op."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1
