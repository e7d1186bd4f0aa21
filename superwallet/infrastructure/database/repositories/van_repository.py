"""SQLAlchemy implementation for VAN payment records"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import VanTransaction


class SqlVanRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, values: dict[str, Any]) -> VanTransaction:
        record = VanTransaction(**values)
        self.session.add(record)
        await self.session.flush()
        return record

    async def list_by_user(self, user_id: str, status: str | None = None) -> Sequence[VanTransaction]:
        stmt = select(VanTransaction).where(VanTransaction.user_id == user_id)
        if status and status != "all":
            stmt = stmt.where(VanTransaction.status == status)
        stmt = stmt.order_by(desc(VanTransaction.created_at), desc(VanTransaction.id))
        result = await self.session.execute(stmt)
        return result.scalars().all()
