"""Request-scoped database session."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


__all__ = ["get_db_session"]
