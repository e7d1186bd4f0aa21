"""SQLAlchemy implementation for transaction records"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import Transaction


class SqlTransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, values: dict[str, Any]) -> Transaction:
        tx = Transaction(**values)
        self.session.add(tx)
        await self.session.flush()
        return tx

    async def get(self, transaction_id: int) -> Transaction | None:
        stmt = select(Transaction).where(Transaction.id == transaction_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_hash(self, tx_hash: str) -> Transaction | None:
        stmt = select(Transaction).where(Transaction.tx_hash == tx_hash)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(desc(Transaction.created_at), desc(Transaction.id))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def transition_status(
        self,
        transaction_id: int,
        *,
        from_status: str,
        to_status: str,
        confirmed_at: datetime | None,
    ) -> Transaction | None:
        stmt = (
            update(Transaction)
            .where(Transaction.id == transaction_id, Transaction.status == from_status)
            .values(status=to_status, confirmed_at=confirmed_at)
            .returning(Transaction)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
