"""Repository protocol for transaction records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from superwallet.infrastructure.database.models import Transaction as TransactionModel


class TransactionRepository(Protocol):
    async def add(self, values: dict[str, Any]) -> TransactionModel:
        ...

    async def get(self, transaction_id: int) -> TransactionModel | None:
        ...

    async def get_by_hash(self, tx_hash: str) -> TransactionModel | None:
        ...

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[TransactionModel]:
        ...

    async def transition_status(
        self,
        transaction_id: int,
        *,
        from_status: str,
        to_status: str,
        confirmed_at: datetime | None,
    ) -> TransactionModel | None:
        ...
