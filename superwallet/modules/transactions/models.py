"""Domain models for transaction records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from superwallet.core.money import Numeric

TRANSACTION_STATUSES = ("pending", "completed", "failed")
TRANSACTION_TYPES = ("send", "receive", "payment")


@dataclass(slots=True)
class NewTransaction:
    user_id: str
    from_address: str
    to_address: str
    asset_type: str
    amount: Numeric
    transaction_type: str
    fee: Numeric = 0
    status: str = "pending"
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None
    merchant_info: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class TransactionRecord:
    id: int
    user_id: str
    from_address: str
    to_address: str
    asset_type: str
    amount: Decimal
    fee: Decimal
    tx_hash: str
    status: str
    transaction_type: str
    created_at: datetime
    block_number: Optional[int] = None
    merchant_info: Optional[dict[str, Any]] = field(default=None)
    confirmed_at: Optional[datetime] = None
