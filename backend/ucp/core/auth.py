"""Session token issuing and validation.

Session tokens are HS256 JWTs carrying the account id plus the role claims
current at login. Validation is a pure function of the token string, the
server secret and the current time: there is no server-side session state,
no revocation list and no refresh. Rotating AUTH_SECRET invalidates every
outstanding token.

Pipeline:
- create_session_token: issue a token after login or registration
- read_session_token: pull the raw token from request headers
- decode_session_token: verify signature, structure and expiry
"""

import binascii
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt.utils import base64url_decode, base64url_encode

from ucp.core.config import settings

_ALGORITHM = "HS256"
_AUDIENCE = "ucp"
_REQUIRED_CLAIMS = ["sub", "exp", "iat", "aud", "iss"]
_BEARER_PREFIX = "bearer "


class InvalidSessionToken(Exception):
    """Token failed validation.

    Deliberately carries no reason: callers must not be able to tell a
    tampered token from an expired one.
    """


@dataclass(frozen=True)
class SessionClaims:
    """Identity and role claims carried by a session token.

    Role claims reflect the account at login time. Authorization checks
    re-read the account row instead of trusting them.
    """

    account_id: int
    admin: int
    helper: bool


def create_session_token(
    *,
    account_id: int,
    admin: int,
    helper: bool,
    secret: str,
    expires_delta: timedelta | None = None,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed session token.

    Args:
        account_id: Account primary key for the sub claim.
        admin: Admin level at login time.
        helper: Helper flag at login time.
        secret: HMAC signing secret.
        expires_delta: Time until expiration. Defaults to
            settings.session_token_ttl_hours.
        issued_at: Issue time. Defaults to now.

    Returns:
        Encoded JWT string.
    """
    now = issued_at or datetime.now(UTC)
    ttl = expires_delta or timedelta(hours=settings.session_token_ttl_hours)
    payload = {
        "sub": str(account_id),
        "admin": int(admin),
        "helper": bool(helper),
        "aud": _AUDIENCE,
        "iss": settings.auth_issuer,
        "exp": now + ttl,
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def read_session_token(headers: Mapping[str, str]) -> str | None:
    """Raw token from the configured header, else ``Authorization: Bearer``.

    Returns:
        The token string, or None when neither header carries one.
    """
    token = headers.get(settings.auth_header_name)
    if token and token.strip():
        return token.strip()
    authorization = headers.get("authorization", "")
    if authorization.lower().startswith(_BEARER_PREFIX):
        return authorization[len(_BEARER_PREFIX) :].strip() or None
    return None


def _has_canonical_signature(token: str) -> bool:
    """Check the signature segment survives a decode/encode round trip.

    base64url ignores the unused low bits of the final character, so two
    different strings can decode to the same signature. Requiring the
    canonical encoding means any single-character change is rejected.
    """
    signature = token.rsplit(".", 1)[-1].encode()
    try:
        return base64url_encode(base64url_decode(signature)) == signature
    except (binascii.Error, ValueError):
        return False


def decode_session_token(token: str, *, secret: str) -> SessionClaims:
    """Validate a session token and return its claims.

    Args:
        token: Encoded JWT string from the request header.
        secret: HMAC signing secret.

    Returns:
        SessionClaims for the token's account.

    Raises:
        InvalidSessionToken: For a bad signature, malformed structure,
            missing claims or an expired token.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[_ALGORITHM],
            audience=_AUDIENCE,
            issuer=settings.auth_issuer,
            options={"require": _REQUIRED_CLAIMS},
        )
        claims = SessionClaims(
            account_id=int(payload["sub"]),
            admin=int(payload.get("admin", 0)),
            helper=bool(payload.get("helper", False)),
        )
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as exc:
        raise InvalidSessionToken from exc

    if not _has_canonical_signature(token):
        raise InvalidSessionToken

    return claims
