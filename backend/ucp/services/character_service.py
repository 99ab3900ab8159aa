"""Character creation and deletion rules.

Rules enforced here:
- A character name is ``Firstname_Lastname`` and unique server-wide.
- An account owns at most MAX_CHARACTERS characters.
- New characters get a random skin from their gender's pool.
- After deleting a character, an account must wait DELETION_COOLDOWN
  before deleting another.
"""

import logging
import random
from datetime import UTC, datetime, timedelta

from ucp.core.errors import DomainError
from ucp.models.account import Account
from ucp.models.character import Character
from ucp.repositories.account_repository import AccountRepository
from ucp.repositories.character_repository import CharacterRepository

logger = logging.getLogger(__name__)

MAX_CHARACTERS = 5
DELETION_COOLDOWN = timedelta(hours=24)

GENDER_MALE = 0
GENDER_FEMALE = 1

MALE_SKINS: tuple[int, ...] = (
    1, 2, 3, 4, 5, 6, 7, 8, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25,
    26, 27, 28, 29, 30, 32, 33, 34, 35, 36, 37, 42, 43, 44, 45, 46, 47, 48,
    49, 50, 51, 52, 57, 58, 59, 60, 61, 62, 66, 67, 68, 70, 71, 72, 73, 78,
    79, 80, 81, 82, 83, 84, 86, 94, 95, 96, 97, 98, 99, 100, 101, 102, 103,
    104, 105, 106, 107, 108, 109, 110, 111, 112, 113, 114, 115, 116, 117,
    118, 119, 120, 121, 122, 123, 124, 125, 126, 127, 128, 132, 133, 134,
    135, 136, 137, 142, 143, 144, 146, 147, 149, 153, 154, 155, 156, 158,
    160, 161, 162, 163, 164, 165, 166, 167, 168, 170, 171, 173, 174, 175,
    176, 177, 178, 180, 181, 182, 183, 184, 185, 186, 187, 188, 189, 200,
    202, 203, 204, 206, 208, 209, 210, 212, 213, 217, 220, 221, 222, 223,
    227, 228, 229, 230, 234, 235, 236, 239, 240, 241, 242, 247, 248, 249,
    250, 252, 253, 254, 255, 258, 259, 260, 261, 262, 264, 268, 269, 270,
    271, 272, 273, 289, 291, 292, 293, 294, 295, 296, 297, 299,
)  # fmt: skip

FEMALE_SKINS: tuple[int, ...] = (
    9, 10, 12, 13, 31, 39, 40, 41, 53, 54, 55, 56, 65, 69, 76, 77, 88, 89,
    90, 91, 92, 93, 131, 141, 148, 150, 151, 157, 169, 172, 190, 191, 192,
    193, 211,
)  # fmt: skip

MSG_NAME_TAKEN = "You can't use that character name as it's already in use."
MSG_LIMIT_REACHED = "You cannot create any more characters."
MSG_NOT_FOUND = "Character not found."
MSG_DELETION_DELAYED = "You still have 24 hours time delay for character deletion."


def build_character_name(firstname: str, lastname: str) -> str:
    """Join name parts the way the game server expects."""
    return f"{firstname}_{lastname}"


def pick_skin(gender: int, rng: random.Random | None = None) -> int:
    """Pick a random starter skin for ``gender``."""
    pool = FEMALE_SKINS if gender == GENDER_FEMALE else MALE_SKINS
    return (rng or random).choice(pool)  # nosec B311 - cosmetic, not security


class CharacterService:
    """Creates and deletes characters for an account.

    Args:
        characters: Character repository.
        accounts: Account repository (for the deletion cool-down).
    """

    def __init__(
        self,
        characters: CharacterRepository,
        accounts: AccountRepository,
    ) -> None:
        self._characters = characters
        self._accounts = accounts

    async def create(
        self,
        account: Account,
        *,
        firstname: str,
        lastname: str,
        gender: int,
    ) -> Character:
        """Create a character for ``account``.

        Raises:
            DomainError: If the name is taken or the account is at the
                character limit.
        """
        name = build_character_name(firstname, lastname)
        if await self._characters.name_exists(name):
            raise DomainError(MSG_NAME_TAKEN, code="NAME_TAKEN")
        if await self._characters.count_for_account(account.id) >= MAX_CHARACTERS:
            raise DomainError(MSG_LIMIT_REACHED, code="CHARACTER_LIMIT")

        character = await self._characters.create(
            account_id=account.id,
            name=name,
            gender=gender,
            skin_id=pick_skin(gender),
        )
        logger.info("Account %s created character %s", account.id, character.id)
        return character

    async def delete(
        self,
        account: Account,
        character_id: int,
        *,
        now: datetime | None = None,
    ) -> None:
        """Delete one of ``account``'s characters and start the cool-down.

        Raises:
            DomainError: If the character is not the account's, or the
                cool-down from the previous deletion has not elapsed.
        """
        now = now or datetime.now(UTC)
        character = await self._characters.get_owned(character_id, account.id)
        if character is None:
            raise DomainError(MSG_NOT_FOUND, code="NOT_FOUND")
        if (
            account.delay_character_deletion is not None
            and account.delay_character_deletion > now
        ):
            raise DomainError(MSG_DELETION_DELAYED, code="DELETION_DELAYED")

        await self._characters.delete(character.id)
        await self._accounts.update(
            account, delay_character_deletion=now + DELETION_COOLDOWN
        )
        logger.info("Account %s deleted character %s", account.id, character_id)
