"""Rate limiting configuration using slowapi.

Security: Slows down credential stuffing and reset-email flooding by limiting
request frequency on the credential endpoints.

When a valid session token is present (in the token header or as
``Authorization: Bearer``), rate limiting keys on the token subject
(per-account) so players behind a shared IP don't throttle each other.
Other requests fall back to IP-based keying.

Usage in routers:
    from ucp.core.rate_limiting import limiter

    @router.post("")
    @limiter.limit(lambda: settings.rate_limit_auth)
    async def login(request: Request, ...):
        ...
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from ucp.core.auth import (
    InvalidSessionToken,
    decode_session_token,
    read_session_token,
)
from ucp.core.config import settings
from ucp.core.responses import ErrorItem, ErrorResponse


def _rate_limit_key_func(request: Request) -> str:
    """Get rate limit key from request.

    Key format:
    - Valid session token: "account:{id}"
    - No/invalid token: "unauth:{ip}"

    Args:
        request: The incoming request.

    Returns:
        Rate limit key string.
    """
    token = read_session_token(request.headers)
    if token:
        try:
            claims = decode_session_token(
                token, secret=settings.auth_secret.get_secret_value()
            )
            return f"account:{claims.account_id}"
        except InvalidSessionToken:
            pass

    return f"unauth:{get_remote_address(request)}"


# Global limiter instance
# Configured with in-memory storage (suitable for single-instance deployment)
limiter = Limiter(
    key_func=_rate_limit_key_func,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(
    _request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Handle rate limit exceeded errors.

    Returns 429 Too Many Requests with the standard error envelope.

    Args:
        request: The incoming request.
        exc: The rate limit exception.

    Returns:
        JSONResponse with 429 status and retry-after header.
    """
    # Parse retry-after from exception detail (e.g., "10 per 1 minute")
    # Fallback to 60 seconds if parsing fails
    try:
        retry_after = str(exc.detail.split()[-1])
        int(retry_after.rstrip("s"))
    except (ValueError, AttributeError, IndexError):
        retry_after = "60"

    return JSONResponse(
        status_code=429,
        content=ErrorResponse(
            errors=[
                ErrorItem(
                    code="RATE_LIMITED",
                    msg=f"Rate limit exceeded: {exc.detail}",
                )
            ]
        ).model_dump(exclude_none=True),
        headers={"Retry-After": retry_after},
    )
