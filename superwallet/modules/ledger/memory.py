"""Process-local balance repository for tests and database-less demos."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from datetime import datetime

from superwallet.core.money import unit_bounds
from superwallet.infrastructure.database.models import WalletBalance as WalletBalanceModel


class InMemoryBalanceRepository:
    """Keeps rows in a dict and serializes writers per address.

    Each address has its own ``asyncio.Lock``; the sufficiency check and the
    write happen while holding it, so debits on one address never interleave
    while other addresses proceed independently.
    """

    def __init__(self) -> None:
        self.rows: dict[str, WalletBalanceModel] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, address: str) -> asyncio.Lock:
        return self._locks[address]

    async def get(self, address: str) -> WalletBalanceModel | None:
        return self.rows.get(address)

    async def add_if_sufficient(
        self,
        address: str,
        delta_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalanceModel | None:
        async with self.lock_for(address):
            row = self.rows.get(address)
            if row is None or row.asset_type != asset_type:
                return None
            lower, upper = unit_bounds(delta_units)
            if not lower <= row.balance_units <= upper:
                return None
            # yield while holding the lock so concurrent writers really queue
            await asyncio.sleep(0)
            row.balance_units += delta_units
            row.updated_at = updated_at
            return row

    async def create(
        self,
        address: str,
        balance_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalanceModel | None:
        async with self.lock_for(address):
            if address in self.rows:
                return None
            row = WalletBalanceModel(
                address=address,
                balance_units=balance_units,
                asset_type=asset_type,
                created_at=updated_at,
                updated_at=updated_at,
            )
            self.rows[address] = row
            return row


__all__ = ["InMemoryBalanceRepository"]
