"""Repository protocol for wallet balance rows."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from superwallet.infrastructure.database.models import WalletBalance as WalletBalanceModel


class BalanceRepository(Protocol):
    async def get(self, address: str) -> WalletBalanceModel | None:
        ...

    async def add_if_sufficient(
        self,
        address: str,
        delta_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalanceModel | None:
        """Atomically add ``delta_units`` to a row holding ``asset_type``.

        Returns the updated row, or ``None`` when the row is missing, holds a
        different asset, or the result would leave the 0..MAX_UNITS range.
        """
        ...

    async def create(
        self,
        address: str,
        balance_units: int,
        asset_type: str,
        *,
        updated_at: datetime,
    ) -> WalletBalanceModel | None:
        """Insert a new row; ``None`` when another writer created it first."""
        ...

