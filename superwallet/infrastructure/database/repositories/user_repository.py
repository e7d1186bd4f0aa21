"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import User


class SqlUserRepository:
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        stmt = select(User).where(User.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, values: dict[str, Any]) -> User:
        model = User(**values)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model

    async def update(self, user_id: str, values: dict[str, Any]) -> User | None:
        model = await self.get_by_id(user_id)
        if model is None:
            return None
        for key, value in values.items():
            setattr(model, key, value)
        await self._session.flush()
        await self._session.refresh(model)
        return model
