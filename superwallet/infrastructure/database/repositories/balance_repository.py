"""SQLAlchemy implementation for wallet balance rows"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.money import MAX_UNITS, unit_bounds
from superwallet.infrastructure.database.models import WalletBalance

logger = logging.getLogger(__name__)


class SqlBalanceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, address: str) -> WalletBalance | None:
        stmt = select(WalletBalance).where(WalletBalance.address == address)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_if_sufficient(
        self,
        address: str,
        delta_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalance | None:
        # bounds are computed up front so the predicate never overflows BIGINT
        lower, upper = unit_bounds(delta_units, MAX_UNITS)
        stmt = (
            update(WalletBalance)
            .where(
                WalletBalance.address == address,
                WalletBalance.asset_type == asset_type,
                WalletBalance.balance_units.between(lower, upper),
            )
            .values(balance_units=WalletBalance.balance_units + delta_units, updated_at=updated_at)
            .returning(WalletBalance)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(
        self,
        address: str,
        balance_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalance | None:
        row = WalletBalance(
            address=address,
            balance_units=balance_units,
            asset_type=asset_type,
            updated_at=updated_at,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(row)
                await self.session.flush()
        except IntegrityError:
            logger.info("Balance row for %s created concurrently, retrying as update", address)
            return None
        return row
