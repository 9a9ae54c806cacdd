"""Alembic environment configuration for async migrations."""

import asyncio
from logging.config import fileConfig
from typing import Any

from sqlalchemy import pool, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from cms.core.config import get_settings
from cms.db.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model metadata for 'autogenerate' support
target_metadata = Base.metadata

settings = get_settings()

# Arbitrary key shared by every migration runner
MIGRATION_LOCK_KEY = 482_151


def get_url() -> str:
    """Get database URL from settings."""
    return settings.processed_database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection."""
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    configuration = config.get_section(config.config_ini_section, {})
    url = get_url()
    configuration["sqlalchemy.url"] = url
    is_postgres = url.startswith("postgresql")

    connect_args: dict[str, Any] = {}
    if is_postgres:
        connect_args = {
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
            "timeout": 10,
        }

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=connect_args,
    )

    async with connectable.connect() as connection:
        if is_postgres:
            # Prevent concurrent migration runs
            await connection.execute(text(f"SELECT pg_advisory_lock({MIGRATION_LOCK_KEY})"))
        try:
            await connection.run_sync(do_run_migrations)
            await connection.commit()
        finally:
            if is_postgres:
                await connection.execute(text(f"SELECT pg_advisory_unlock({MIGRATION_LOCK_KEY})"))

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
