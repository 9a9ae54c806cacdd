"""Async database engine and sessions.

The same code path serves the hosted PostgreSQL platform (direct, or through
its transaction pooler when the URL carries ``pgbouncer=true``) and the
SQLite database used by the test suite.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from cms.core.config import Settings, get_settings
from cms.core.logging import get_logger

logger = get_logger(__name__)

# Global engine and session factory
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

POOL_RECYCLE_SECONDS = 1800


def engine_options(settings: Settings) -> tuple[str, dict[str, Any]]:
    """Resolve the driver URL and ``create_async_engine`` keyword arguments.

    ``pgbouncer`` is a pooler hint, not a driver option: it is removed from
    the URL and switches the engine to ``NullPool`` with asyncpg's statement
    caches disabled.
    """
    url = make_url(settings.processed_database_url)
    behind_pooler = url.query.get("pgbouncer") == "true"
    url = url.difference_update_query(["pgbouncer"])

    options: dict[str, Any] = {"echo": settings.db_echo, "pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        return url.render_as_string(hide_password=False), options

    options["connect_args"] = {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }
    if behind_pooler:
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=POOL_RECYCLE_SECONDS,
        )
    return url.render_as_string(hide_password=False), options


def get_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    global _engine

    if _engine is None:
        url, options = engine_options(get_settings())
        _engine = create_async_engine(url, **options)
        logger.info(
            "Database engine created",
            backend=_engine.dialect.name,
            pooled="poolclass" not in options,
        )

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides an async database session.

    Automatically handles commit on success and rollback on exception.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """Context manager for database sessions outside of FastAPI."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create content tables if they don't exist.

    For production, use Alembic migrations instead.
    """
    from cms.db.models import Base

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized")


async def close_db() -> None:
    """Close database connections and dispose of the engine."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database connections closed")


async def check_db_health(timeout: float = 5.0) -> bool:
    """Check database connectivity with timeout."""

    async def _check() -> bool:
        engine = get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    try:
        return await asyncio.wait_for(_check(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("Database health check timed out", timeout=timeout)
        return False
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return False
