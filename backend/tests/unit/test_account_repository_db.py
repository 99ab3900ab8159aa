"""Tests for AccountRepository against PostgreSQL."""

import pytest
from sqlalchemy.exc import IntegrityError

from ucp.repositories.account_repository import AccountRepository


@pytest.fixture
def repo(db_session) -> AccountRepository:
    return AccountRepository(db_session)


async def _create(
    repo: AccountRepository, name: str = "player", email: str = "p@example.com"
):
    return await repo.create(
        name=name,
        email=email,
        password_hash="$2b$04$hash",
        register_ip="203.0.113.1",
    )


class TestCreate:
    async def test_defaults_and_lowercased_email(self, repo):
        account = await _create(repo, email="Mixed@Example.COM")
        assert account.id is not None
        assert account.email == "mixed@example.com"
        assert account.email_verified is False
        assert account.admin == 0
        assert account.helper is False
        assert account.status == 0
        assert account.register_ip == "203.0.113.1"
        assert account.ucp_login_ip == "203.0.113.1"
        assert account.registered_at is not None

    async def test_duplicate_name_violates_constraint(self, repo):
        await _create(repo)
        with pytest.raises(IntegrityError):
            await _create(repo, email="other@example.com")


class TestLookup:
    async def test_get_by_email_case_insensitive(self, repo):
        account = await _create(repo)
        assert await repo.get_by_email("P@EXAMPLE.com") is account

    async def test_get_by_name_is_exact(self, repo):
        await _create(repo)
        assert await repo.get_by_name("player") is not None
        assert await repo.get_by_name("PLAYER") is None

    async def test_get_by_name_or_email(self, repo):
        account = await _create(repo)
        assert await repo.get_by_name_or_email("player") is account
        assert await repo.get_by_name_or_email("p@example.com") is account
        assert await repo.get_by_name_or_email("nobody") is None

    async def test_get_by_id_missing(self, repo):
        assert await repo.get_by_id(123456) is None


class TestUpdate:
    async def test_updates_allowed_fields(self, repo):
        account = await _create(repo)
        await repo.update(account, email="NEW@example.com", email_verified=True)
        assert account.email == "new@example.com"
        assert account.email_verified is True

    async def test_rejects_role_fields(self, repo):
        account = await _create(repo)
        with pytest.raises(ValueError, match="admin"):
            await repo.update(account, admin=5)
        assert account.admin == 0

    async def test_set_roles(self, repo):
        account = await _create(repo)
        await repo.set_roles(account, admin=2, helper=True)
        reloaded = await repo.get_by_id(account.id)
        assert reloaded.admin == 2
        assert reloaded.helper is True
