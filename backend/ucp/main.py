"""FastAPI application entry point.

REST API with versioned routing and a single error envelope.

This module creates and configures the FastAPI application, including:
- Logging setup (stdlib for library modules, structlog here)
- Exception handlers that render every failure as
  ``{"errors": [{"status": false, ...}]}``
- API v1 router mounting
- Health check endpoint
"""

import logging
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ucp.api.v1.router import router as v1_router
from ucp.core.config import settings
from ucp.core.errors import APIError
from ucp.core.rate_limiting import limiter, rate_limit_exceeded_handler
from ucp.core.responses import ErrorItem, ErrorResponse
from ucp.schemas.fields import RuleViolations

logger = structlog.get_logger()

_GENERIC_ERROR = "An unexpected error occurred"
_REQUEST_LOCATIONS = frozenset({"body", "path", "query", "header", "cookie"})


def configure_logging() -> None:
    """Apply LOG_LEVEL to stdlib logging and structlog."""
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses.

    Headers added:
    - X-Frame-Options: Prevents clickjacking attacks
    - X-Content-Type-Options: Prevents MIME sniffing
    - Referrer-Policy: Controls referrer information leakage
    - Cache-Control: Prevents caching of API responses (tokens, account data)
    - Content-Security-Policy: Restricts resource loading (API returns no HTML)
    - Strict-Transport-Security: Forces HTTPS (production only)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Responses carry session tokens and account data
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, max-age=0"

        response.headers["Content-Security-Policy"] = (
            "default-src 'none'; frame-ancestors 'none'"
        )

        # HSTS only in production (assumes HTTPS via reverse proxy)
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


def _error_response(status_code: int, items: list[ErrorItem]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(errors=items).model_dump(exclude_none=True),
    )


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors.

    Args:
        request: The incoming request.
        exc: The APIError that was raised.

    Returns:
        JSONResponse with error envelope and the error's status code.
    """
    items = [ErrorItem(code=exc.code, msg=exc.message)]
    for detail in exc.details or []:
        items.append(ErrorItem(**{"code": exc.code, **detail}))
    return _error_response(exc.status_code, items)


def _validation_items(error: dict[str, Any]) -> list[ErrorItem]:
    """Convert one Pydantic error into envelope items, one per broken rule."""
    loc = tuple(error.get("loc") or ())
    location = None
    if loc and loc[0] in _REQUEST_LOCATIONS:
        location, loc = str(loc[0]), loc[1:]
    param = ".".join(str(part) for part in loc) or None

    cause = (error.get("ctx") or {}).get("error")
    if error["type"] == "missing":
        label = str(loc[-1]).replace("_", " ").capitalize() if loc else "Value"
        messages = [f"{label} is required."]
    elif isinstance(cause, RuleViolations):
        messages = cause.messages
    elif error["type"] == "value_error" and cause is not None:
        # Field validators raise player-facing messages
        messages = [str(cause)]
    else:
        messages = [error["msg"]]

    return [
        ErrorItem(code="VALIDATION_ERROR", msg=msg, param=param, location=location)
        for msg in messages
    ]


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors.

    Returns 400 with one item per failed field rule, each naming the
    field (``param``) and where it was read from (``location``).

    Args:
        request: The incoming request.
        exc: The RequestValidationError.

    Returns:
        JSONResponse with one VALIDATION_ERROR item per failure.
    """
    items = [item for error in exc.errors() for item in _validation_items(error)]
    return _error_response(400, items)


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Logs the exception and returns 500. The exception message is included
    when EXPOSE_ERROR_DETAILS is on; otherwise the message is generic.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with INTERNAL_ERROR (500).
    """
    logger.exception("Unhandled exception", exc_info=exc, path=str(request.url.path))

    msg = _GENERIC_ERROR
    if settings.expose_error_details and str(exc):
        msg = str(exc)
    return _error_response(500, [ErrorItem(code="INTERNAL_ERROR", msg=msg)])


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    WHY FACTORY FUNCTION:
    - Enables testing with different configurations
    - Clear separation between app creation and startup

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()

    app = FastAPI(
        title="UCP API",
        version="1.0.0",
        description="User Control Panel backend for the role-play server",
    )

    # Middleware order: Starlette uses LIFO, so the LAST added runs FIRST.
    # CORS must run first to handle preflight requests, so add it last.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Authorization",
            settings.auth_header_name,
        ],
    )

    # Order matters: specific handlers first, then catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    # Rate limiting on credential endpoints
    app.state.limiter = limiter

    app.include_router(v1_router, prefix="/api/v1")

    # Health check endpoint (outside versioned API)
    @app.get("/health")
    def health_check() -> dict:
        """Health check endpoint for monitoring.

        Returns:
            {"status": "healthy"} if service is running.
        """
        return {"status": "healthy"}

    return app


# Create the application instance
# Used by uvicorn: uvicorn ucp.main:app
app = create_app()
