"""Balance ledger: the only writer of wallet balance rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InsufficientBalance, InvalidArgument
from superwallet.core.money import Numeric, from_units, to_decimal, to_units
from superwallet.infrastructure.database.models import WalletBalance as WalletBalanceModel
from superwallet.infrastructure.database.repositories.balance_repository import SqlBalanceRepository

from .models import BalanceSnapshot
from .repository import BalanceRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BalanceLedger:
    repository: BalanceRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "BalanceLedger":
        return cls(SqlBalanceRepository(session))

    async def get_balance(self, address: str) -> BalanceSnapshot:
        row = await self.repository.get(address)
        if row is None:
            return BalanceSnapshot(address=address, balance=Decimal(0), asset_type="", updated_at=None)
        return self._to_snapshot(row)

    async def apply_delta(self, address: str, delta: Numeric, asset_type: str = "XP") -> Decimal:
        """Add a signed ``delta`` to the balance of ``address`` and return the new balance.

        Debits that would take the balance below zero raise
        ``InsufficientBalance`` and leave the row untouched. The check and the
        write happen in one conditional UPDATE, so concurrent callers on the
        same address cannot both spend the same funds. A row holds a single
        asset: deltas in any other asset are rejected.
        """
        if not address:
            raise InvalidArgument("address is required", field="address")
        if not asset_type:
            raise InvalidArgument("asset_type is required", field="asset_type")
        amount = to_decimal(delta, "delta")
        delta_units = to_units(amount, "delta")
        if delta_units == 0 and amount != 0:
            raise InvalidArgument("delta is smaller than the ledger precision", field="delta")
        now = datetime.now(timezone.utc)

        row = await self.repository.add_if_sufficient(address, delta_units, asset_type, updated_at=now)
        if row is None:
            row = await self._apply_to_missing_or_rejected(address, delta_units, asset_type, now)
        new_balance = from_units(row.balance_units)
        logger.info("Ledger %s delta %s %s -> %s", address, amount, asset_type, new_balance)
        return new_balance

    async def _apply_to_missing_or_rejected(
        self,
        address: str,
        delta_units: int,
        asset_type: str,
        now: datetime,
    ) -> WalletBalanceModel:
        current = await self.repository.get(address)
        if current is not None:
            raise self._rejection(current, delta_units, asset_type)
        if delta_units < 0:
            raise self._insufficient(address, 0, delta_units)
        if delta_units == 0:
            return WalletBalanceModel(address=address, balance_units=0, asset_type=asset_type, updated_at=None)

        created = await self.repository.create(address, delta_units, asset_type, updated_at=now)
        if created is not None:
            return created
        # another writer created the row in between; fall back to the conditional update
        row = await self.repository.add_if_sufficient(address, delta_units, asset_type, updated_at=now)
        if row is None:
            current = await self.repository.get(address)
            if current is None:
                raise self._insufficient(address, 0, delta_units)
            raise self._rejection(current, delta_units, asset_type)
        return row

    def _rejection(self, current: WalletBalanceModel, delta_units: int, asset_type: str) -> Exception:
        if current.asset_type != asset_type:
            logger.warning(
                "Rejected %s delta on %s: the row holds %s",
                asset_type,
                current.address,
                current.asset_type,
            )
            return InvalidArgument(
                f"{current.address} holds {current.asset_type}, not {asset_type}",
                field="asset_type",
                address=current.address,
                stored_asset_type=current.asset_type,
            )
        if delta_units > 0:
            return InvalidArgument("balance would exceed the supported maximum", field="delta")
        return self._insufficient(current.address, current.balance_units, delta_units)

    @staticmethod
    def _insufficient(address: str, current_units: int, delta_units: int) -> InsufficientBalance:
        logger.warning(
            "Rejected debit on %s: balance %s, requested %s",
            address,
            from_units(current_units),
            from_units(-delta_units),
        )
        return InsufficientBalance(
            address=address,
            current_balance=from_units(current_units),
            requested_amount=from_units(-delta_units),
        )

    @staticmethod
    def _to_snapshot(model: WalletBalanceModel) -> BalanceSnapshot:
        return BalanceSnapshot(
            address=model.address,
            balance=from_units(model.balance_units),
            asset_type=model.asset_type,
            updated_at=model.updated_at,
        )
