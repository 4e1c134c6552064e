"""
Test infrastructure for the advertisement board API.

Strategy
--------
- SQLite in-memory via aiosqlite stands in for Postgres, so the suite
  runs without any database server.
- StaticPool makes every session share the one in-memory connection;
  a second connection would see an empty database.
- The app's get_db dependency is overridden so requests use the test
  session factory.
- Tables are created through the real schema manager before each test and
  dropped afterwards, giving every test a clean database.
- httpx's ASGITransport does not run the lifespan, so the production
  engine is never touched.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from adboard.database import Base, build_engine, get_db
from adboard.main import app
from adboard.schema import ensure_schema

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = build_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create the schema before each test, drop it after."""
    await ensure_schema(engine_test)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def test_engine():
    return engine_test


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a fresh AsyncSession for calling service functions directly.

    Services open their own transactions, so tests must not leave an
    implicit transaction open on this session before calling one.
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
