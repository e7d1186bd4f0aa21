"""Tax refund estimation."""

from .calculator import (
    REQUIRED_DOCUMENTS,
    TAX_BRACKETS,
    RefundEligibility,
    TaxEstimate,
    assess_eligibility,
    bracket_rate,
    estimate,
)

__all__ = [
    "REQUIRED_DOCUMENTS",
    "TAX_BRACKETS",
    "RefundEligibility",
    "TaxEstimate",
    "assess_eligibility",
    "bracket_rate",
    "estimate",
]
