"""Tests for API error classes and the error envelope handlers."""

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient

from ucp.core.config import settings
from ucp.core.errors import (
    AdminRequiredError,
    APIError,
    DomainError,
    MailDeliveryError,
    UnauthorizedError,
    ValidationError,
)
from ucp.main import (
    _validation_items,
    api_error_handler,
    internal_error_handler,
    validation_error_handler,
)
from ucp.schemas.fields import RuleViolations


class TestErrorClasses:
    """Status codes and error codes of the APIError family."""

    def test_api_error_defaults_to_500(self):
        error = APIError(code="TEST", message="Test")
        assert error.status_code == 500
        assert error.details is None
        assert str(error) == "Test"

    @pytest.mark.parametrize(
        ("error", "status_code", "code"),
        [
            (ValidationError("bad"), 400, "VALIDATION_ERROR"),
            (DomainError("nope"), 400, "REJECTED"),
            (DomainError("nope", code="NAME_TAKEN"), 400, "NAME_TAKEN"),
            (UnauthorizedError(), 401, "UNAUTHORIZED"),
            (AdminRequiredError(), 401, "ADMIN_REQUIRED"),
            (MailDeliveryError(), 502, "MAIL_DELIVERY_FAILED"),
        ],
    )
    def test_status_and_code(self, error, status_code, code):
        assert error.status_code == status_code
        assert error.code == code

    def test_unauthorized_default_message(self):
        assert UnauthorizedError().message == "Invalid token."


class TestValidationItems:
    """_validation_items converts Pydantic errors into envelope items."""

    def test_missing_field(self):
        (item,) = _validation_items(
            {
                "type": "missing",
                "loc": ("body", "old_password"),
                "msg": "Field required",
            }
        )
        assert item.msg == "Old password is required."
        assert item.param == "old_password"
        assert item.location == "body"

    def test_value_error_uses_raised_message(self):
        (item,) = _validation_items(
            {
                "type": "value_error",
                "loc": ("body", "email"),
                "msg": "Value error, Invalid email address.",
                "ctx": {"error": ValueError("Invalid email address.")},
            }
        )
        assert item.msg == "Invalid email address."

    def test_each_broken_rule_becomes_an_item(self):
        items = _validation_items(
            {
                "type": "value_error",
                "loc": ("body", "username"),
                "msg": "Value error, ...",
                "ctx": {"error": RuleViolations(["Too short.", "Bad characters."])},
            }
        )
        assert [i.msg for i in items] == ["Too short.", "Bad characters."]
        assert {i.param for i in items} == {"username"}

    def test_nested_location(self):
        (item,) = _validation_items(
            {
                "type": "string_type",
                "loc": ("body", "answers", 0, "answer"),
                "msg": "Input should be a valid string",
            }
        )
        assert item.param == "answers.0.answer"
        assert item.msg == "Input should be a valid string"

    def test_path_parameter(self):
        (item,) = _validation_items(
            {
                "type": "int_parsing",
                "loc": ("path", "character_id"),
                "msg": "Input should be a valid integer",
            }
        )
        assert item.location == "path"
        assert item.param == "character_id"


@pytest.fixture
async def client():
    app = FastAPI()
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    @app.get("/domain")
    async def domain():
        raise DomainError("That news does not exist.", code="NOT_FOUND")

    @app.get("/details")
    async def details():
        raise ValidationError(
            "Some answers are invalid.",
            details=[{"msg": "Answer is required.", "param": "answers.1.answer"}],
        )

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database went away")

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHandlers:
    """Every failure renders as {"errors": [...]} with status false."""

    async def test_domain_error(self, client):
        response = await client.get("/domain")
        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                {
                    "status": False,
                    "code": "NOT_FOUND",
                    "msg": "That news does not exist.",
                }
            ]
        }

    async def test_details_become_extra_items(self, client):
        response = await client.get("/details")
        errors = response.json()["errors"]
        assert len(errors) == 2
        assert errors[1] == {
            "status": False,
            "code": "VALIDATION_ERROR",
            "msg": "Answer is required.",
            "param": "answers.1.answer",
        }

    async def test_path_validation_is_400(self, client):
        response = await client.get("/items/abc")
        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["location"] == "path"
        assert error["param"] == "item_id"

    async def test_unexpected_error_exposes_message_when_enabled(
        self, client, monkeypatch
    ):
        monkeypatch.setattr(settings, "expose_error_details", True)
        response = await client.get("/boom")
        assert response.status_code == 500
        assert response.json()["errors"][0] == {
            "status": False,
            "code": "INTERNAL_ERROR",
            "msg": "database went away",
        }

    async def test_unexpected_error_generic_when_disabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "expose_error_details", False)
        response = await client.get("/boom")
        assert response.status_code == 500
        assert response.json()["errors"][0]["msg"] == "An unexpected error occurred"
