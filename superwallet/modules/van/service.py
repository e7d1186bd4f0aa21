"""VAN payment service.

Settlement with a real VAN operator is out of scope: payments are approved
immediately and only the record is kept.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument
from superwallet.core.money import Numeric, from_cents, to_cents, to_decimal
from superwallet.infrastructure.database.models import VanTransaction as VanTransactionModel
from superwallet.infrastructure.database.repositories.van_repository import SqlVanRepository
from superwallet.modules.exchange import lookup_rate

from .models import VanPayment
from .repository import VanRepository

logger = logging.getLogger(__name__)


class VanIdGenerator:
    """``VAN`` + epoch milliseconds + a per-process counter."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"VAN{int(time.time() * 1000)}{next(self._counter) % 10000:04d}"


@dataclass(slots=True)
class VanService:
    repository: VanRepository
    id_factory: Callable[[], str] = field(default_factory=VanIdGenerator)

    @classmethod
    def with_session(cls, session: AsyncSession, id_factory: Callable[[], str] | None = None) -> "VanService":
        return cls(SqlVanRepository(session), id_factory or VanIdGenerator())

    async def process_payment(
        self,
        *,
        user_id: str,
        amount: Numeric,
        merchant_id: str,
        currency: str = "KRW",
        terminal_id: Optional[str] = None,
        provider: str = "mock-van",
        transaction_id: Optional[int] = None,
    ) -> VanPayment:
        value = to_decimal(amount, "amount")
        if value <= 0:
            raise InvalidArgument("amount must be greater than zero", field="amount")
        if not merchant_id:
            raise InvalidArgument("merchant_id is required", field="merchant_id")
        currency = currency.upper()
        exchange_rate = None if currency == "KRW" else lookup_rate(currency, "KRW")

        now = datetime.now(timezone.utc)
        model = await self.repository.add(
            {
                "user_id": user_id,
                "transaction_id": transaction_id,
                "van_provider": provider,
                "merchant_id": merchant_id,
                "terminal_id": terminal_id,
                "van_tx_id": self.id_factory(),
                "amount_cents": to_cents(value),
                "currency": currency,
                "exchange_rate": str(exchange_rate) if exchange_rate is not None else None,
                "status": "approved",
                "created_at": now,
                "processed_at": now,
            }
        )
        logger.info("VAN payment %s approved for merchant %s (%s %s)", model.van_tx_id, merchant_id, value, currency)
        return self._to_domain(model)

    async def list_by_user(self, user_id: str, status: str | None = None) -> list[VanPayment]:
        rows = await self.repository.list_by_user(user_id, status)
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: VanTransactionModel) -> VanPayment:
        return VanPayment(
            id=model.id,
            user_id=model.user_id,
            van_provider=model.van_provider,
            merchant_id=model.merchant_id,
            terminal_id=model.terminal_id,
            van_tx_id=model.van_tx_id,
            amount=from_cents(model.amount_cents),
            currency=model.currency,
            exchange_rate=Decimal(model.exchange_rate) if model.exchange_rate else None,
            status=model.status,
            created_at=model.created_at,
            processed_at=model.processed_at,
            transaction_id=model.transaction_id,
        )
