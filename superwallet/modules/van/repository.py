"""Repository protocol for VAN payment records."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from superwallet.infrastructure.database.models import VanTransaction as VanTransactionModel


class VanRepository(Protocol):
    async def add(self, values: dict[str, Any]) -> VanTransactionModel:
        ...

    async def list_by_user(self, user_id: str, status: str | None = None) -> Sequence[VanTransactionModel]:
        ...
