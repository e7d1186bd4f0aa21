"""Shared fixtures.

SQL-backed tests get a throw-away SQLite file per test. Async code is driven
with ``asyncio.run`` so every test owns its event loop and engine.
"""
import asyncio

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from superwallet.core.config import DatabaseSettings
from superwallet.infrastructure.database import Base, engine_options
from superwallet.infrastructure.database import models  # noqa: F401


class SequenceHashGenerator:
    """Deterministic tx hashes: 0x000...001, 0x000...002, ..."""

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return "0x" + format(self.issued, "064x")


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}"


@pytest.fixture
def run_db(db_url):
    """Run ``scenario(session_factory)`` in a fresh loop against an up-to-date schema."""

    def runner(scenario):
        async def main():
            engine = create_async_engine(db_url, **engine_options(DatabaseSettings(url=db_url)))
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            factory = async_sessionmaker(engine, expire_on_commit=False)
            try:
                return await scenario(factory)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def hash_generator():
    return SequenceHashGenerator()
