"""Test configuration and fixtures.

Provides isolated test fixtures for:
- Database sessions with proper cleanup
- An in-memory Redis stand-in with a controllable clock
- HTTP client with dependency overrides
- Access tokens for dashboard roles
"""

import os

# Settings are read once and cached; pin them before the app is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///file::memory:?cache=shared&uri=true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only-min-32-chars"
os.environ["UPSTASH_REDIS_REST_URL"] = ""
os.environ["UPSTASH_REDIS_REST_TOKEN"] = ""
os.environ["DEBUG"] = "true"

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cms.core.security import create_access_token
from cms.db.models import Base, Project
from cms.db.session import get_db
from cms.main import app
from cms.services.cache import CacheService, get_cache_service

TEST_DATABASE_URL = os.environ["DATABASE_URL"]


class FakeRedis:
    """Async GET/SET-with-expiry/DELETE over a dict, driven by ``now``."""

    def __init__(self) -> None:
        self.store: dict[str, tuple[str, float | None]] = {}
        self.now = 0.0
        self.closed = False

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def get(self, key: str) -> str | None:
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self.store[key]
            return None
        return value

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.store[key] = (value, self.now + ex if ex else None)
        return True

    async def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    async def ping(self) -> str:
        return "PONG"

    async def close(self) -> None:
        self.closed = True


def make_cache_service(client: Any | None) -> CacheService:
    """Build a CacheService that is already initialized with ``client``."""
    with patch("cms.services.cache.base.get_settings") as mock_settings:
        mock_settings.return_value.redis_available = False
        service = CacheService()
        service._get_client()
    service._client = client
    return service


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine with fresh schema for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session with transaction rollback."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Cache Fixtures
# =============================================================================

@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache_service(fake_redis: FakeRedis) -> CacheService:
    """Cache service backed by the in-memory Redis stand-in."""
    return make_cache_service(fake_redis)


@pytest.fixture
def passthrough_cache() -> CacheService:
    """Cache service with no store configured."""
    return make_cache_service(None)


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def client(
    test_db: AsyncSession,
    cache_service: CacheService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database and cache overrides."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_service] = lambda: cache_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================

def make_token(role: str | None, sub: str = "staff-1") -> str:
    payload: dict[str, Any] = {"sub": sub, "email": f"{sub}@example.com"}
    if role is not None:
        payload["app_metadata"] = {"role": role}
    return create_access_token(payload)


@pytest.fixture
def editor_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('editor')}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('admin', sub='admin-1')}"}


@pytest.fixture
def hr_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('hr', sub='hr-1')}"}


# =============================================================================
# Content Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def existing_project(test_db: AsyncSession) -> Project:
    """A project occupying the slug 'website-redesign'."""
    project = Project(
        title="Website Redesign",
        slug="website-redesign",
        client_name="Acme",
    )
    test_db.add(project)
    await test_db.commit()
    await test_db.refresh(project)
    return project
