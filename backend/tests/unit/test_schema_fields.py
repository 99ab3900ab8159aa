"""Tests for the reusable request field types."""

import pytest
from pydantic import ValidationError

from ucp.schemas.account import RoleUpdateRequest
from ucp.schemas.auth import LoginRequest, RegisterRequest
from ucp.schemas.character import CharacterCreate
from ucp.schemas.quiz import QuizAnswerBulkCreate


def _messages(exc_info: pytest.ExceptionInfo[ValidationError]) -> list[str]:
    return [str(e["ctx"]["error"]) for e in exc_info.value.errors() if "ctx" in e]


class TestUsername:
    @pytest.mark.parametrize("name", ["abc", "player.one", "Player_1", "a" * 20])
    def test_valid(self, name):
        body = RegisterRequest(username=name, email="a@example.com", password="secret1")
        assert body.username == name

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("ab", "Username must be between 3 and 20 characters."),
            ("a" * 21, "Username must be between 3 and 20 characters."),
            ("bad-name", "Username may only contain letters, numbers, '_' and '.'."),
            ("   ", "Username is required."),
        ],
    )
    def test_invalid(self, name, message):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username=name, email="a@example.com", password="secret1")
        assert _messages(exc_info) == [message]


    def test_every_broken_rule_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username="x!", email="a@example.com", password="secret1")
        (error,) = exc_info.value.errors()
        assert error["ctx"]["error"].messages == [
            "Username must be between 3 and 20 characters.",
            "Username may only contain letters, numbers, '_' and '.'.",
        ]


class TestPassword:
    def test_not_stripped(self):
        body = RegisterRequest(
            username="abc", email="a@example.com", password=" pass1 "
        )
        assert body.password == " pass1 "

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username="abc", email="a@example.com", password="x" * 21)
        assert _messages(exc_info) == ["Password must be between 6 and 20 characters."]


class TestUserMail:
    def test_email_is_lowercased(self):
        body = LoginRequest(usermail="Player@Example.com", password="x")
        assert body.usermail == "player@example.com"

    def test_username_kept(self):
        assert LoginRequest(usermail="Player_1", password="x").usermail == "Player_1"

    def test_neither(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest(usermail="not valid!", password="x")
        assert _messages(exc_info) == ["Enter a valid username or email address."]


class TestNameParts:
    def test_capitalized(self):
        body = CharacterCreate(firstname="jOHN", lastname="doe", gender=0)
        assert (body.firstname, body.lastname) == ("John", "Doe")

    def test_name_part_reports_both_rules(self):
        with pytest.raises(ValidationError) as exc_info:
            CharacterCreate(firstname="7", lastname="Doe", gender=0)
        (error,) = exc_info.value.errors()
        assert error["loc"] == ("firstname",)
        assert error["ctx"]["error"].messages == [
            "Firstname may only contain letters.",
            "Firstname must be between 2 and 11 characters.",
        ]

    def test_gender_accepts_numeric_string(self):
        assert CharacterCreate(firstname="Jo", lastname="Do", gender="1").gender == 1

    def test_gender_must_be_numeric(self):
        with pytest.raises(ValidationError) as exc_info:
            CharacterCreate(firstname="Jo", lastname="Do", gender="male")
        assert _messages(exc_info) == ["Gender must be numeric."]


class TestFlagAndStrictInts:
    def test_role_helper_accepts_zero_one(self):
        body = RoleUpdateRequest(admin=1, helper=0)
        assert body.helper is False

    def test_role_admin_rejects_bool(self):
        with pytest.raises(ValidationError):
            RoleUpdateRequest(admin=True, helper=False)

    def test_role_admin_upper_bound(self):
        with pytest.raises(ValidationError):
            RoleUpdateRequest(admin=11, helper=False)


class TestNestedLists:
    def test_empty_answer_list_rejected(self):
        with pytest.raises(ValidationError):
            QuizAnswerBulkCreate(answers=[])

    def test_nested_error_location(self):
        with pytest.raises(ValidationError) as exc_info:
            QuizAnswerBulkCreate(answers=[{"quiz_id": 1, "answer": ""}])
        assert exc_info.value.errors()[0]["loc"] == ("answers", 0, "answer")
