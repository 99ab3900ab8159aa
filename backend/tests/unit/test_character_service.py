"""Tests for CharacterService rules."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from tests.fakes import InMemoryAccountRepository, make_account
from ucp.core.errors import DomainError
from ucp.models.character import Character
from ucp.services.character_service import (
    DELETION_COOLDOWN,
    FEMALE_SKINS,
    GENDER_FEMALE,
    GENDER_MALE,
    MALE_SKINS,
    MAX_CHARACTERS,
    CharacterService,
    build_character_name,
    pick_skin,
)


class _Characters:
    """List-backed character repository double."""

    def __init__(self) -> None:
        self.rows: list[Character] = []

    async def name_exists(self, name: str) -> bool:
        return any(c.name.lower() == name.lower() for c in self.rows)

    async def count_for_account(self, account_id: int) -> int:
        return sum(1 for c in self.rows if c.account_id == account_id)

    async def get_owned(self, character_id: int, account_id: int) -> Character | None:
        return next(
            (
                c
                for c in self.rows
                if c.id == character_id and c.account_id == account_id
            ),
            None,
        )

    async def create(
        self, *, account_id: int, name: str, gender: int, skin_id: int
    ) -> Character:
        character = Character(
            id=len(self.rows) + 1,
            account_id=account_id,
            name=name,
            gender=gender,
            skin_id=skin_id,
        )
        self.rows.append(character)
        return character

    async def delete(self, character_id: int) -> None:
        self.rows = [c for c in self.rows if c.id != character_id]


@pytest.fixture
def account():
    return make_account(1)


@pytest.fixture
def characters() -> _Characters:
    return _Characters()


@pytest.fixture
def service(characters, account) -> CharacterService:
    return CharacterService(characters, InMemoryAccountRepository(account))


class TestHelpers:
    def test_name_joins_with_underscore(self):
        assert build_character_name("John", "Doe") == "John_Doe"

    def test_male_skin_from_male_pool(self):
        rng = random.Random(1)
        assert all(pick_skin(GENDER_MALE, rng) in MALE_SKINS for _ in range(50))

    def test_female_skin_from_female_pool(self):
        rng = random.Random(1)
        assert all(pick_skin(GENDER_FEMALE, rng) in FEMALE_SKINS for _ in range(50))


class TestCreate:
    """CharacterService.create."""

    async def test_creates_character(self, service, characters, account):
        character = await service.create(
            account, firstname="John", lastname="Doe", gender=GENDER_FEMALE
        )
        assert character.name == "John_Doe"
        assert character.account_id == account.id
        assert character.skin_id in FEMALE_SKINS
        assert len(characters.rows) == 1

    async def test_name_taken_case_insensitive(self, service, characters, account):
        await characters.create(account_id=9, name="John_Doe", gender=0, skin_id=1)
        with pytest.raises(DomainError) as exc_info:
            await service.create(
                account, firstname="john", lastname="doe", gender=GENDER_MALE
            )
        assert exc_info.value.code == "NAME_TAKEN"

    async def test_limit(self, service, characters, account):
        for i in range(MAX_CHARACTERS):
            await characters.create(
                account_id=account.id, name=f"Name_Number{i}", gender=0, skin_id=1
            )
        with pytest.raises(DomainError) as exc_info:
            await service.create(
                account, firstname="One", lastname="Toomany", gender=GENDER_MALE
            )
        assert exc_info.value.code == "CHARACTER_LIMIT"
        assert exc_info.value.message == "You cannot create any more characters."


class TestDelete:
    """CharacterService.delete."""

    async def test_deletes_and_starts_cooldown(self, service, characters, account):
        character = await service.create(
            account, firstname="John", lastname="Doe", gender=GENDER_MALE
        )
        now = datetime(2026, 1, 1, 12, tzinfo=UTC)
        await service.delete(account, character.id, now=now)
        assert characters.rows == []
        assert account.delay_character_deletion == now + DELETION_COOLDOWN

    async def test_cooldown_blocks_second_deletion(self, service, account):
        first = await service.create(
            account, firstname="John", lastname="Doe", gender=GENDER_MALE
        )
        second = await service.create(
            account, firstname="Jane", lastname="Doe", gender=GENDER_FEMALE
        )
        now = datetime(2026, 1, 1, 12, tzinfo=UTC)
        await service.delete(account, first.id, now=now)
        with pytest.raises(DomainError) as exc_info:
            await service.delete(account, second.id, now=now + timedelta(hours=23))
        assert exc_info.value.code == "DELETION_DELAYED"

    async def test_cooldown_expires(self, service, characters, account):
        first = await service.create(
            account, firstname="John", lastname="Doe", gender=GENDER_MALE
        )
        second = await service.create(
            account, firstname="Jane", lastname="Doe", gender=GENDER_FEMALE
        )
        now = datetime(2026, 1, 1, 12, tzinfo=UTC)
        await service.delete(account, first.id, now=now)
        await service.delete(account, second.id, now=now + timedelta(hours=25))
        assert characters.rows == []

    async def test_foreign_character_not_found(self, service, characters, account):
        await characters.create(account_id=2, name="Other_Guy", gender=0, skin_id=1)
        with pytest.raises(DomainError) as exc_info:
            await service.delete(account, 1)
        assert exc_info.value.code == "NOT_FOUND"
        assert len(characters.rows) == 1
