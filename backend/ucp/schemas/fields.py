"""Reusable validated field types for request bodies.

A missing value reports only that it is required. Otherwise every rule the
value breaks is collected and raised together as RuleViolations, which the
validation handler expands into one error entry per rule. Messages are
written for players and returned as-is in the error envelope.

Usage:
    class RegisterRequest(RequestModel):
        username: Username
        email: Email
        password: Password
"""

import re
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationInfo

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.]+$")
_LETTERS_PATTERN = re.compile(r"^[a-zA-Z]+$")
_DIGITS_PATTERN = re.compile(r"^\d+$")

USERNAME_MIN, USERNAME_MAX = 3, 20
PASSWORD_MIN, PASSWORD_MAX = 6, 20
# Firstname_Lastname must fit the 24-character name column
NAME_PART_MIN, NAME_PART_MAX = 2, 11
EMAIL_MAX = 100


class RequestModel(BaseModel):
    """Base for request bodies. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class RuleViolations(ValueError):
    """Every rule a single field value broke, in check order."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__(" ".join(messages))
        self.messages = messages


def _raise_violations(messages: list[str]) -> None:
    if messages:
        raise RuleViolations(messages)


def _label(info: ValidationInfo) -> str:
    return (info.field_name or "value").replace("_", " ").capitalize()


def _required_text(value: object, info: ValidationInfo) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{_label(info)} is required.")
    if not isinstance(value, str):
        raise ValueError(f"{_label(info)} must be text.")
    return value.strip()


def _check_username(value: object, info: ValidationInfo) -> str:
    text = _required_text(value, info)
    failures = []
    if not USERNAME_MIN <= len(text) <= USERNAME_MAX:
        failures.append(
            f"{_label(info)} must be between {USERNAME_MIN} and "
            f"{USERNAME_MAX} characters."
        )
    if not _USERNAME_PATTERN.match(text):
        failures.append(
            f"{_label(info)} may only contain letters, numbers, '_' and '.'."
        )
    _raise_violations(failures)
    return text


def _required_secret(value: object, info: ValidationInfo) -> str:
    if value is None or value == "":
        raise ValueError(f"{_label(info)} is required.")
    if not isinstance(value, str):
        raise ValueError(f"{_label(info)} must be text.")
    return value


def _check_password(value: object, info: ValidationInfo) -> str:
    # Passwords are not stripped: surrounding spaces are part of the secret
    value = _required_secret(value, info)
    if not PASSWORD_MIN <= len(value) <= PASSWORD_MAX:
        msg = (
            f"{_label(info)} must be between {PASSWORD_MIN} and "
            f"{PASSWORD_MAX} characters."
        )
        raise ValueError(msg)
    return value


def _check_email(value: object, info: ValidationInfo) -> str:
    text = _required_text(value, info)
    if len(text) > EMAIL_MAX:
        raise ValueError("Invalid email address.")
    try:
        result = validate_email(text, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email address.") from None
    return result.normalized.lower()


def _check_usermail(value: object, info: ValidationInfo) -> str:
    """Accept either a username or an email address."""
    text = _required_text(value, info)
    try:
        return _check_email(text, info)
    except ValueError:
        pass
    try:
        return _check_username(text, info)
    except ValueError:
        raise ValueError("Enter a valid username or email address.") from None


def _check_name_part(value: object, info: ValidationInfo) -> str:
    text = _required_text(value, info)
    failures = []
    if not _LETTERS_PATTERN.match(text):
        failures.append(f"{_label(info)} may only contain letters.")
    if not NAME_PART_MIN <= len(text) <= NAME_PART_MAX:
        failures.append(
            f"{_label(info)} must be between {NAME_PART_MIN} and "
            f"{NAME_PART_MAX} characters."
        )
    _raise_violations(failures)
    return text.capitalize()


def _check_numeric(value: object, info: ValidationInfo) -> int:
    if value is None or value == "":
        raise ValueError(f"{_label(info)} is required.")
    if isinstance(value, bool):
        raise ValueError(f"{_label(info)} must be numeric.")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _DIGITS_PATTERN.match(value.strip()):
        return int(value.strip())
    raise ValueError(f"{_label(info)} must be numeric.")


def _check_flag(value: object, info: ValidationInfo) -> bool:
    if value is None:
        raise ValueError(f"{_label(info)} is required.")
    if isinstance(value, bool):
        return value
    if value in (0, 1):
        return bool(value)
    raise ValueError(f"{_label(info)} must be true or false.")


def max_length(limit: int) -> BeforeValidator:
    """Build a validator capping a required text field at ``limit`` characters."""

    def _check(value: object, info: ValidationInfo) -> str:
        text = _required_text(value, info)
        if len(text) > limit:
            msg = f"{_label(info)} must be at most {limit} characters."
            raise ValueError(msg)
        return text

    return BeforeValidator(_check)


RequiredText = Annotated[str, BeforeValidator(_required_text)]
Username = Annotated[str, BeforeValidator(_check_username)]
Password = Annotated[str, BeforeValidator(_check_password)]
Secret = Annotated[str, BeforeValidator(_required_secret)]
Email = Annotated[str, BeforeValidator(_check_email)]
UserMail = Annotated[str, BeforeValidator(_check_usermail)]
NamePart = Annotated[str, BeforeValidator(_check_name_part)]
Numeric = Annotated[int, BeforeValidator(_check_numeric)]
Flag = Annotated[bool, BeforeValidator(_check_flag)]
