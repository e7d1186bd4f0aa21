"""SQLAlchemy implementation for smart contract deployment records"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import ContractDeployment


class SqlContractRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, values: dict[str, Any]) -> ContractDeployment:
        deployment = ContractDeployment(**values)
        self.session.add(deployment)
        await self.session.flush()
        return deployment

    async def get(self, deployment_id: int) -> ContractDeployment | None:
        stmt = select(ContractDeployment).where(ContractDeployment.id == deployment_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_user(self, user_id: str) -> Sequence[ContractDeployment]:
        stmt = (
            select(ContractDeployment)
            .where(ContractDeployment.user_id == user_id)
            .order_by(desc(ContractDeployment.created_at), desc(ContractDeployment.id))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
