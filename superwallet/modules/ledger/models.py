"""Domain models for the balance ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class BalanceSnapshot:
    address: str
    balance: Decimal
    asset_type: str
    updated_at: Optional[datetime]
