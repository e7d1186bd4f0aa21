"""Domain models for tax refund applications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from superwallet.core.money import Numeric

REFUND_STATUSES = ("pending", "approved", "rejected", "completed")
REFUND_ACTIONS = {"approve": "approved", "reject": "rejected"}


@dataclass(slots=True)
class RefundApplication:
    user_id: str
    gross_income: Numeric
    tax_paid: Numeric
    deductions: Numeric = 0
    refund_type: str = "income_tax"
    tax_year: Optional[int] = None
    bank_account: Optional[str] = None


@dataclass(slots=True)
class TaxRefund:
    id: int
    user_id: str
    refund_type: str
    tax_year: Optional[int]
    gross_income: Decimal
    tax_paid: Decimal
    deductions: Decimal
    taxable_income: Decimal
    calculated_tax: Decimal
    tax_rate: Decimal
    refund_amount: Decimal
    bank_account: Optional[str]
    status: str
    submitted_at: datetime
    processed_at: Optional[datetime] = None
    disbursement_tx_hash: Optional[str] = None
    completed_at: Optional[datetime] = None


@dataclass(slots=True)
class RefundStatistics:
    total_refunded: Decimal
    total_applications: int
    pending_amount: Decimal
    success_rate: Decimal
    average_processing_time: str = "3-5일"


@dataclass(slots=True)
class RefundStep:
    step: str
    completed: bool
    timestamp: Optional[datetime]
