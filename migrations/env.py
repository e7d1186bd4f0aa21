"""Alembic environment for the wallet schema.

The target database is ``DATABASE__URL`` from the application settings unless
``alembic -x url=...`` names another one. Online runs build a short-lived async
engine with the same connect options as the application.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from superwallet.core.config import DatabaseSettings, get_settings
from superwallet.infrastructure.database import engine_options
from superwallet.infrastructure.database import models  # noqa: F401
from superwallet.infrastructure.database.base import Base

SYNC_DRIVERS = {"sqlite+aiosqlite": "sqlite", "postgresql+asyncpg": "postgresql"}

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_settings() -> DatabaseSettings:
    settings = get_settings().database
    override = context.get_x_argument(as_dictionary=True).get("url")
    if override:
        return settings.model_copy(update={"url": override})
    return settings


def offline_url(url: str) -> str:
    """SQL scripts are rendered with the synchronous dialect."""
    parsed = make_url(url)
    driver = SYNC_DRIVERS.get(parsed.drivername)
    return parsed.set(drivername=driver).render_as_string(hide_password=False) if driver else url


def _configure(**kwargs) -> None:
    # batch mode lets ALTER TABLE work on SQLite
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=offline_url(database_settings().url),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    database = database_settings()
    engine = create_async_engine(database.url, **engine_options(database))
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
