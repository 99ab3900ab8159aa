"""Password hashing and verification.

bcrypt with a configurable cost factor (12 in production). Verification is a
pure function of its inputs: a mismatch returns False, while a malformed
stored hash raises ValueError so it surfaces as an infrastructure error.
"""

import bcrypt

from ucp.core.config import settings

# bcrypt only looks at the first 72 bytes; longer inputs are rejected by the
# library, so they can never match a stored hash.
_BCRYPT_MAX_BYTES = 72

# Pre-computed bcrypt hash for timing-safe comparison on account-not-found.
# Security: prevents account enumeration via response time differences.
DUMMY_HASH = "$2b$12$ZP2PVB8yI35X.mkRqcUPUuSzJA1CNRt4dZ7X3cyrfJu.2S3w.Qen2"


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain-text password.
        rounds: bcrypt cost factor. Defaults to settings.bcrypt_rounds.

    Returns:
        bcrypt hash as a string.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash.

    Args:
        password: Plain-text password submitted by the client.
        stored_hash: bcrypt hash from the account row.

    Returns:
        True if the password matches, False otherwise.

    Raises:
        ValueError: If stored_hash is not a valid bcrypt hash.
    """
    secret = password.encode()
    if len(secret) > _BCRYPT_MAX_BYTES:
        # Still pay the hashing cost so timing matches a normal mismatch
        bcrypt.checkpw(b"", DUMMY_HASH.encode())
        return False
    return bcrypt.checkpw(secret, stored_hash.encode())
