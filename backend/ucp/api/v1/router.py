"""API v1 router aggregator.

URL structure with /api/v1 prefix. All v1 endpoint routers are included
here.
"""

from fastapi import APIRouter

from ucp.api.v1 import (
    applications,
    auth,
    bans,
    characters,
    email_verification,
    news,
    password_reset,
    properties,
    quiz,
    statistics,
    users,
)

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

_AUTH_PREFIX = "/auth"

router.include_router(auth.router, prefix=_AUTH_PREFIX, tags=["auth"])
router.include_router(password_reset.router, prefix=_AUTH_PREFIX, tags=["auth"])

# =============================================================================
# Accounts
# =============================================================================

_USERS_PREFIX = "/users"

router.include_router(
    email_verification.router, prefix=_USERS_PREFIX, tags=["users"]
)
router.include_router(applications.router, prefix=_USERS_PREFIX, tags=["users"])
router.include_router(users.router, prefix=_USERS_PREFIX, tags=["users"])

# =============================================================================
# Game Resources
# =============================================================================

router.include_router(characters.router, prefix="/characters", tags=["characters"])
router.include_router(properties.router, prefix="/property", tags=["characters"])
router.include_router(news.router, prefix="/news", tags=["news"])
router.include_router(bans.router, prefix="/bans", tags=["bans"])
router.include_router(quiz.router, prefix="/quiz", tags=["quiz"])
router.include_router(
    statistics.router, prefix="/server/stats", tags=["statistics"]
)
