"""Domain models for wallet payments."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from superwallet.modules.transactions import TransactionRecord


@dataclass(slots=True)
class PaymentReceipt:
    transaction: TransactionRecord
    previous_balance: Optional[Decimal]
    new_balance: Optional[Decimal]
