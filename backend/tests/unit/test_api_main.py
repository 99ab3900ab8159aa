"""Tests for application wiring: health check, headers and CORS."""

from ucp.core.config import settings


class TestHealth:
    async def test_health(self, api_client):
        response = await api_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSecurityHeaders:
    async def test_api_responses_not_cached(self, api_client):
        response = await api_client.get("/api/v1/auth")
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store, max-age=0"

    async def test_no_hsts_outside_production(self, api_client):
        response = await api_client.get("/health")
        assert "Strict-Transport-Security" not in response.headers


class TestCors:
    async def test_preflight_allows_token_header(self, api_client):
        origin = settings.allowed_origins[0]
        response = await api_client.options(
            "/api/v1/auth",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": settings.auth_header_name,
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
        allowed = response.headers["access-control-allow-headers"].lower()
        assert settings.auth_header_name in allowed
