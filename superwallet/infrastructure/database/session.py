"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from superwallet.core.config import DatabaseSettings, get_settings
from superwallet.core.exceptions import StorageUnavailable
from superwallet.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def engine_options(database: DatabaseSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo}
    if make_url(database.url).get_backend_name() == "sqlite":
        # writers queue on the database lock instead of failing immediately
        options["connect_args"] = {"timeout": database.busy_timeout}
        return options
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    options["pool_pre_ping"] = True
    return options


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        database = get_settings().database
        _engine = create_async_engine(database.url, **engine_options(database))
        AsyncSessionFactory = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
        logger.debug("Created database engine for %s", make_url(database.url).render_as_string(hide_password=True))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine (called on shutdown)."""
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """One unit of work: commit on success, roll back on any error.

    Connectivity failures surface as ``StorageUnavailable``.
    """
    get_engine()
    assert AsyncSessionFactory is not None
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except (OperationalError, InterfaceError) as exc:
            await session.rollback()
            logger.error("Database unavailable: %s", exc)
            raise StorageUnavailable() from exc
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create missing tables; alembic migrations remain the source of truth."""
    from superwallet.infrastructure.database import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
