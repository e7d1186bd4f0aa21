"""Korean income tax refund estimation.

One rate is chosen by the bracket the *gross* income falls in and applied to
the whole taxable income. This is not a progressive marginal schedule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from superwallet.core.exceptions import InvalidArgument
from superwallet.core.money import Numeric, to_decimal

# (upper bound of gross income in KRW, rate); the last bracket has no bound
TAX_BRACKETS: tuple[tuple[Decimal | None, Decimal], ...] = (
    (Decimal("12000000"), Decimal("0.06")),
    (Decimal("46000000"), Decimal("0.15")),
    (Decimal("88000000"), Decimal("0.24")),
    (Decimal("150000000"), Decimal("0.35")),
    (None, Decimal("0.38")),
)

REQUIRED_DOCUMENTS = (
    "근로소득원천징수영수증",
    "소득공제증명서",
    "은행통장 사본",
)

_HUNDRED = Decimal(100)
_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class TaxEstimate:
    gross_income: Decimal
    tax_paid: Decimal
    deductions: Decimal
    taxable_income: Decimal
    tax_rate: Decimal
    calculated_tax: Decimal
    refund_amount: Decimal
    effective_rate: Decimal


@dataclass(frozen=True, slots=True)
class RefundEligibility:
    score: int
    processing_time: str
    required_documents: tuple[str, ...] = field(default=REQUIRED_DOCUMENTS)


def bracket_rate(gross_income: Decimal) -> Decimal:
    for upper, rate in TAX_BRACKETS:
        if upper is None or gross_income <= upper:
            return rate
    raise AssertionError("unreachable: last bracket is unbounded")


def estimate(gross_income: Numeric, tax_paid: Numeric, deductions: Numeric = 0) -> TaxEstimate:
    income = _non_negative(gross_income, "gross_income")
    paid = _non_negative(tax_paid, "tax_paid")
    deducted = _non_negative(deductions, "deductions")

    rate = bracket_rate(income)
    taxable_income = max(Decimal(0), income - deducted)
    calculated_tax = taxable_income * rate
    refund_amount = max(Decimal(0), paid - calculated_tax)
    if income:
        effective_rate = (calculated_tax / income * _HUNDRED).quantize(_TWO_PLACES)
    else:
        effective_rate = Decimal("0.00")

    return TaxEstimate(
        gross_income=income,
        tax_paid=paid,
        deductions=deducted,
        taxable_income=taxable_income,
        tax_rate=rate,
        calculated_tax=calculated_tax,
        refund_amount=refund_amount,
        effective_rate=effective_rate,
    )


def assess_eligibility(
    gross_income: Numeric,
    deductions: Numeric,
    refund_type: str | None,
    refund_amount: Numeric,
) -> RefundEligibility:
    """Heuristic eligibility score shown next to an estimate."""
    income = _non_negative(gross_income, "gross_income")
    deducted = _non_negative(deductions, "deductions")
    refund = _non_negative(refund_amount, "refund_amount")

    score = 85
    if income > Decimal("100000000"):
        score -= 10
    if deducted > income * Decimal("0.3"):
        score -= 5
    if refund_type == "income_tax":
        score += 5
    score = min(100, max(0, score))

    processing_time = "5-7일" if refund > Decimal("5000000") else "3-5일"
    return RefundEligibility(score=score, processing_time=processing_time)


def _non_negative(value: Numeric, name: str) -> Decimal:
    result = to_decimal(value, name)
    if result < 0:
        raise InvalidArgument(f"{name} must not be negative", field=name)
    return result
