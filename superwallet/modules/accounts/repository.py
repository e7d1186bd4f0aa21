"""Repository protocol for user accounts."""

from __future__ import annotations

from typing import Any, Protocol

from superwallet.infrastructure.database.models import User as UserModel


class UserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> UserModel | None:
        ...

    async def get_by_email(self, email: str) -> UserModel | None:
        ...

    async def create(self, values: dict[str, Any]) -> UserModel:
        ...

    async def update(self, user_id: str, values: dict[str, Any]) -> UserModel | None:
        ...
