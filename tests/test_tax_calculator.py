"""
Tests for refund estimation and the eligibility heuristic.
"""
from decimal import Decimal

import pytest

from superwallet.core.exceptions import InvalidArgument
from superwallet.modules.tax import REQUIRED_DOCUMENTS, assess_eligibility, bracket_rate, estimate


class TestEstimate:
    """Bracket selection and refund arithmetic."""

    def test_lowest_bracket(self):
        result = estimate(10_000_000, 1_000_000, 0)

        assert result.tax_rate == Decimal("0.06")
        assert result.calculated_tax == Decimal("600000")
        assert result.refund_amount == Decimal("400000")
        assert result.effective_rate == Decimal("6.00")

    def test_refund_is_zero_when_tax_owed_exceeds_paid(self):
        result = estimate(100_000_000, 20_000_000, 0)

        assert result.tax_rate == Decimal("0.35")
        assert result.calculated_tax == Decimal("35000000")
        assert result.refund_amount == Decimal(0)

    def test_rate_follows_gross_income_not_taxable_income(self):
        """Deductions lower the taxable base but never the bracket."""
        result = estimate(50_000_000, 5_000_000, 40_000_000)

        assert result.taxable_income == Decimal("10000000")
        assert result.tax_rate == Decimal("0.24")
        assert result.calculated_tax == Decimal("2400000")
        assert result.refund_amount == Decimal("2600000")

    def test_deductions_larger_than_income_floor_at_zero(self):
        result = estimate(1_000_000, 50_000, 5_000_000)

        assert result.taxable_income == Decimal(0)
        assert result.refund_amount == Decimal("50000")

    def test_zero_income_has_zero_effective_rate(self):
        result = estimate(0, 0)

        assert result.effective_rate == Decimal(0)
        assert result.refund_amount == Decimal(0)

    @pytest.mark.parametrize(
        "income,rate",
        [
            (12_000_000, "0.06"),
            (12_000_001, "0.15"),
            (46_000_000, "0.15"),
            (88_000_000, "0.24"),
            (150_000_000, "0.35"),
            (150_000_001, "0.38"),
        ],
    )
    def test_bracket_boundaries_are_inclusive(self, income, rate):
        assert bracket_rate(Decimal(income)) == Decimal(rate)

    @pytest.mark.parametrize("field", ["gross_income", "tax_paid", "deductions"])
    def test_negative_inputs_are_rejected(self, field):
        kwargs = {"gross_income": 1_000, "tax_paid": 100, "deductions": 0}
        kwargs[field] = -1

        with pytest.raises(InvalidArgument) as exc_info:
            estimate(**kwargs)

        assert exc_info.value.details["field"] == field

    def test_non_numeric_input_is_rejected(self):
        with pytest.raises(InvalidArgument):
            estimate("lots", 0)


class TestEligibility:
    """Score adjustments and processing time."""

    def test_income_tax_bonus(self):
        result = assess_eligibility(50_000_000, 0, "income_tax", 100_000)

        assert result.score == 90
        assert result.processing_time == "3-5일"
        assert result.required_documents == REQUIRED_DOCUMENTS

    def test_high_income_and_heavy_deductions_lower_the_score(self):
        result = assess_eligibility(200_000_000, 70_000_000, "vat", 6_000_000)

        assert result.score == 70
        assert result.processing_time == "5-7일"
