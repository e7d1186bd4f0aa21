"""SQLAlchemy implementation for tax refund applications"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import TaxRefund


class SqlRefundRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, values: dict[str, Any]) -> TaxRefund:
        refund = TaxRefund(**values)
        self.session.add(refund)
        await self.session.flush()
        return refund

    async def get(self, refund_id: int) -> TaxRefund | None:
        stmt = select(TaxRefund).where(TaxRefund.id == refund_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_user(self, user_id: str) -> Sequence[TaxRefund]:
        stmt = (
            select(TaxRefund)
            .where(TaxRefund.user_id == user_id)
            .order_by(desc(TaxRefund.submitted_at), desc(TaxRefund.id))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def transition(
        self,
        refund_id: int,
        *,
        from_status: str,
        values: dict[str, Any],
    ) -> TaxRefund | None:
        stmt = (
            update(TaxRefund)
            .where(TaxRefund.id == refund_id, TaxRefund.status == from_status)
            .values(**values)
            .returning(TaxRefund)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
