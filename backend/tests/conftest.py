import socket
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tests.fakes import (
    FakeSession,
    InMemoryAccountRepository,
    InMemoryCodeStore,
    RecordingEmailSender,
    make_account,
)
from ucp.core.auth import create_session_token
from ucp.core.config import settings
from ucp.core.rate_limiting import limiter
from ucp.models.account import Account
from ucp.models.base import Base

# Use separate test database
TEST_DATABASE_URL = settings.database_url.replace(
    settings.database_name, f"{settings.database_name}_test"
)

# Security: This is a test-only secret. Production uses a real secret from env.
TEST_AUTH_SECRET = "test-secret-key-that-is-at-least-32-characters-long"  # nosec B105  # gitleaks:allow

# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4

PLAYER_ID = 1
ADMIN_ID = 2
PLAYER_PASSWORD = "secret123"  # nosec B105
ADMIN_PASSWORD = "admin1234"  # nosec B105


def create_test_token(
    account_id: int = PLAYER_ID,
    *,
    admin: int = 0,
    helper: bool = False,
    secret: str = TEST_AUTH_SECRET,
    expires_delta: timedelta | None = None,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed session token for test authentication.

    Args:
        account_id: Account id for the sub claim.
        admin: Admin level claim.
        helper: Helper flag claim.
        secret: Signing secret (must match settings.auth_secret in tests).
        expires_delta: Time until expiration. Defaults to 1 hour.
        issued_at: Issue time. Defaults to now.

    Returns:
        Encoded token string.
    """
    return create_session_token(
        account_id=account_id,
        admin=admin,
        helper=helper,
        secret=secret,
        expires_delta=expires_delta or timedelta(hours=1),
        issued_at=issued_at or datetime.now(UTC),
    )


def auth_headers(account_id: int = PLAYER_ID, **kwargs) -> dict[str, str]:
    """Request headers carrying a valid session token."""
    return {settings.auth_header_name: create_test_token(account_id, **kwargs)}


def _is_postgres_available() -> bool:
    """Check if PostgreSQL is accepting connections.

    Returns:
        True if PostgreSQL is reachable on port 5432, False otherwise.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("127.0.0.1", 5432))
        sock.close()
        return result == 0
    except OSError:
        return False


# Check once at module load time
_POSTGRES_AVAILABLE = _is_postgres_available()


def skip_if_no_postgres() -> None:
    """Skip test if PostgreSQL is not available.

    Called by fixtures that require database connection.
    """
    if not _POSTGRES_AVAILABLE:
        pytest.skip(
            "PostgreSQL not available on port 5432. "
            "Start a local PostgreSQL server to run database tests."
        )


# =============================================================================
# Global test settings
# =============================================================================


@pytest.fixture(autouse=True)
def pinned_settings() -> Iterator[None]:
    """Pin the signing secret and a cheap bcrypt cost for every test."""
    original_secret = settings.auth_secret
    original_rounds = settings.bcrypt_rounds
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)
    settings.bcrypt_rounds = TEST_BCRYPT_ROUNDS
    yield
    settings.auth_secret = original_secret
    settings.bcrypt_rounds = original_rounds


@pytest.fixture(autouse=True)
def disable_rate_limiting() -> Iterator[None]:
    """Disable rate limiting so repeated requests in tests are not throttled.

    test_rate_limiting.py re-enables it where it is under test.
    """
    original = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = original


# =============================================================================
# In-memory API fixtures (no database)
# =============================================================================


@pytest.fixture
def player() -> Account:
    """Verified, non-admin account."""
    return make_account(PLAYER_ID, name="player_one", email="player@example.com")


@pytest.fixture
def admin() -> Account:
    """Verified account with admin level 3."""
    return make_account(
        ADMIN_ID,
        name="head_admin",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        admin=3,
    )


@pytest.fixture
def accounts(player: Account, admin: Account) -> InMemoryAccountRepository:
    """Account repository double seeded with the player and the admin."""
    return InMemoryAccountRepository(player, admin)


@pytest.fixture
def code_store() -> InMemoryCodeStore:
    """One-time code storage double."""
    return InMemoryCodeStore()


@pytest.fixture
def mailer() -> RecordingEmailSender:
    """Mailer double recording sent messages."""
    return RecordingEmailSender()


@pytest.fixture
def fake_session() -> FakeSession:
    """Session double counting commits and rollbacks."""
    return FakeSession()


@pytest_asyncio.fixture
async def api_client(
    accounts: InMemoryAccountRepository,
    code_store: InMemoryCodeStore,
    mailer: RecordingEmailSender,
    fake_session: FakeSession,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the in-memory doubles.

    Overrides the session, the account and code repositories and the
    mailer. Tests mutate the yielded doubles through their own fixtures.

    Yields:
        AsyncClient without credentials; pass auth_headers() per request.
    """
    from ucp.api.deps import (
        get_account_repository,
        get_code_repository,
        get_email_sender,
    )
    from ucp.core.database import get_db
    from ucp.main import app

    async def override_get_db() -> AsyncGenerator[FakeSession, None]:
        yield fake_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_account_repository] = lambda: accounts
    app.dependency_overrides[get_code_repository] = lambda: code_store
    app.dependency_overrides[get_email_sender] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Database fixtures (PostgreSQL)
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine.

    Skips test if PostgreSQL is not available (e.g., Docker not running).
    """
    skip_if_no_postgres()

    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def db_player(db_session: AsyncSession) -> Account:
    """Player account persisted in the test database."""
    account = make_account(None, name="player_one", email="player@example.com")
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


@pytest_asyncio.fixture
async def db_admin(db_session: AsyncSession) -> Account:
    """Admin account persisted in the test database."""
    account = make_account(
        None,
        name="head_admin",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        admin=3,
    )
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


@pytest_asyncio.fixture
async def db_client(
    db_engine,
    db_player,  # noqa: ARG001 - ensures the player exists
    db_admin,  # noqa: ARG001 - ensures the admin exists
    mailer: RecordingEmailSender,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client backed by the test database.

    Sets up:
    - Test database connection via dependency override
    - Recording mailer instead of the Resend API

    Yields:
        AsyncClient without credentials; pass auth_headers() per request.
    """
    from ucp.api.deps import get_email_sender
    from ucp.core.database import get_db
    from ucp.main import app

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
