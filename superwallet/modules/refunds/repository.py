"""Repository protocol for tax refund applications."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from superwallet.infrastructure.database.models import TaxRefund as TaxRefundModel


class RefundRepository(Protocol):
    async def add(self, values: dict[str, Any]) -> TaxRefundModel:
        ...

    async def get(self, refund_id: int) -> TaxRefundModel | None:
        ...

    async def list_by_user(self, user_id: str) -> Sequence[TaxRefundModel]:
        ...

    async def transition(
        self,
        refund_id: int,
        *,
        from_status: str,
        values: dict[str, Any],
    ) -> TaxRefundModel | None:
        """Apply ``values`` only while the row is still in ``from_status``."""
        ...
