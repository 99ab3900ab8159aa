"""Tests for rate limiting.

Key function behaviour, the 429 envelope, and the login limit end to end.
"""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from tests.conftest import PLAYER_ID, create_test_token
from ucp.core.config import settings
from ucp.core.rate_limiting import (
    _rate_limit_key_func,
    limiter,
    rate_limit_exceeded_handler,
)


def _request(headers: dict[str, str] | None = None) -> MagicMock:
    request = MagicMock()
    request.headers = headers or {}
    request.client.host = "198.51.100.4"
    return request


class TestKeyFunction:
    """_rate_limit_key_func."""

    def test_valid_token_keys_on_account(self):
        token = create_test_token(PLAYER_ID)
        key = _rate_limit_key_func(_request({settings.auth_header_name: token}))
        assert key == f"account:{PLAYER_ID}"

    def test_bearer_token_keys_on_account(self):
        token = create_test_token(PLAYER_ID)
        key = _rate_limit_key_func(_request({"authorization": f"Bearer {token}"}))
        assert key == f"account:{PLAYER_ID}"

    def test_invalid_token_falls_back_to_ip(self):
        key = _rate_limit_key_func(_request({settings.auth_header_name: "garbage"}))
        assert key == "unauth:198.51.100.4"

    def test_no_token_keys_on_ip(self):
        assert _rate_limit_key_func(_request()) == "unauth:198.51.100.4"


class TestExceededHandler:
    """rate_limit_exceeded_handler."""

    @staticmethod
    def _scope_request() -> Request:
        return Request({"type": "http", "method": "POST", "path": "/", "headers": []})

    def test_returns_429_envelope(self):
        exc = MagicMock()
        exc.detail = "10 per 1 minute"
        response = rate_limit_exceeded_handler(self._scope_request(), exc)
        assert response.status_code == 429
        assert b'"code":"RATE_LIMITED"' in response.body
        assert b'"status":false' in response.body
        assert response.headers["Retry-After"] == "60"

    def test_retry_after_from_numeric_detail(self):
        exc = MagicMock()
        exc.detail = "retry after 30"
        response = rate_limit_exceeded_handler(self._scope_request(), exc)
        assert response.headers["Retry-After"] == "30"

    def test_retry_after_falls_back_to_60(self):
        exc = MagicMock()
        exc.detail = None
        response = rate_limit_exceeded_handler(self._scope_request(), exc)
        assert response.headers["Retry-After"] == "60"


@pytest.fixture
def enabled_limiter():
    limiter.enabled = True
    limiter.reset()
    yield limiter
    limiter.reset()
    limiter.enabled = False


class TestLoginLimit:
    """POST /auth is throttled after rate_limit_auth attempts."""

    async def test_login_throttled(self, api_client, enabled_limiter):
        limit = int(settings.rate_limit_auth.split("/")[0])
        body = {"usermail": "player_one", "password": "wrong-pass"}
        for _ in range(limit):
            response = await api_client.post("/api/v1/auth", json=body)
            assert response.status_code == 400
        response = await api_client.post("/api/v1/auth", json=body)
        assert response.status_code == 429
        assert response.json()["errors"][0]["code"] == "RATE_LIMITED"
        assert "Retry-After" in response.headers
