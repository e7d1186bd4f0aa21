"""Domain models for VAN payment records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class VanPayment:
    id: int
    user_id: str
    van_provider: str
    merchant_id: str
    terminal_id: Optional[str]
    van_tx_id: str
    amount: Decimal
    currency: str
    exchange_rate: Optional[Decimal]
    status: str
    created_at: datetime
    processed_at: Optional[datetime]
    transaction_id: Optional[int] = None
