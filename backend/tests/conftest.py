"""Shared test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (via aiosqlite) with the
full schema, wrapped in a transaction that rolls back afterwards, so the suite
runs without a PostgreSQL server.
"""

import os

# Must be set before housecal.config is imported anywhere.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-house-calendar")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RESEND_API_KEY", "")

import uuid  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import housecal.models  # noqa: E402,F401
from housecal.auth.jwt import create_access_token  # noqa: E402
from housecal.database import Base, get_db  # noqa: E402
from housecal.main import app  # noqa: E402
from housecal.models.house import House  # noqa: E402
from housecal.models.profile import Profile  # noqa: E402

_TEST_DB_URL = "sqlite+aiosqlite://"


def token_headers(user_id: uuid.UUID | str, email: str | None = None) -> dict[str, str]:
    """Authorization headers carrying an identity token for ``user_id``."""
    claims = {"sub": str(user_id)}
    if email is not None:
        claims["email"] = email
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


# ---------------------------------------------------------------------------
# Per-test database: fresh schema, transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory engine whose single connection holds the schema."""
    engine = create_async_engine(
        _TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: profiles and identity tokens
# ---------------------------------------------------------------------------


async def _make_profile(db_session: AsyncSession, *, name: str | None, is_admin: bool = False) -> Profile:
    unique = uuid.uuid4().hex[:8]
    profile = Profile(
        id=uuid.uuid4(),
        email=f"member-{unique}@test.com",
        name=name,
        is_admin=is_admin,
    )
    db_session.add(profile)
    await db_session.flush()
    await db_session.refresh(profile)
    return profile


@pytest_asyncio.fixture
async def test_profile(db_session: AsyncSession) -> Profile:
    """A regular family member who has set their name."""
    return await _make_profile(db_session, name="Test Member")


@pytest_asyncio.fixture
async def other_profile(db_session: AsyncSession) -> Profile:
    """A second family member."""
    return await _make_profile(db_session, name="Other Member")


@pytest_asyncio.fixture
async def admin_profile(db_session: AsyncSession) -> Profile:
    """A family member with the admin flag."""
    return await _make_profile(db_session, name="Admin Member", is_admin=True)


@pytest_asyncio.fixture
async def auth_headers(test_profile: Profile) -> dict[str, str]:
    return token_headers(test_profile.id, test_profile.email)


@pytest_asyncio.fixture
async def other_auth_headers(other_profile: Profile) -> dict[str, str]:
    return token_headers(other_profile.id, other_profile.email)


@pytest_asyncio.fixture
async def admin_headers(admin_profile: Profile) -> dict[str, str]:
    return token_headers(admin_profile.id, admin_profile.email)


@pytest_asyncio.fixture
async def nameless_profile(db_session: AsyncSession) -> Profile:
    """A signed-in user who has not set their name yet."""
    return await _make_profile(db_session, name=None)


@pytest_asyncio.fixture
async def nameless_headers(nameless_profile: Profile) -> dict[str, str]:
    return token_headers(nameless_profile.id, nameless_profile.email)


@pytest_asyncio.fixture
async def new_identity() -> tuple[uuid.UUID, str, dict[str, str]]:
    """A signed-in user with no profile row at all: (user_id, email, headers)."""
    user_id = uuid.uuid4()
    email = f"newcomer-{user_id.hex[:8]}@test.com"
    return user_id, email, token_headers(user_id, email)


# ---------------------------------------------------------------------------
# Convenience fixtures: houses
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def houses(db_session: AsyncSession) -> list[House]:
    """Three houses, returned in insertion order."""
    rows = [
        House(name="156 Bay Ave", rules="Quiet hours after 10pm."),
        House(name="112 Bear Ln", rules="Check-out by 11am.\nNo pets upstairs."),
        House(name="155 Bay Ave", rules=None),
    ]
    db_session.add_all(rows)
    await db_session.flush()
    for row in rows:
        await db_session.refresh(row)
    return rows


@pytest_asyncio.fixture
async def test_house(houses: list[House]) -> House:
    return houses[0]
