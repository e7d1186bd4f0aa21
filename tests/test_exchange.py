"""
Tests for KWAN rates and currency conversion.
"""
from decimal import Decimal

import pytest

from superwallet.core.exceptions import InvalidArgument
from superwallet.modules.exchange import KWAN_RATES, convert, lookup_rate


class TestConvert:

    def test_kwan_conversion_uses_lower_fee(self):
        result = convert(10_000, "krw", "kwan")

        assert result.from_currency == "KRW"
        assert result.to_currency == "KWAN"
        assert result.rate == Decimal("0.001")
        assert result.fees == Decimal("0.02")
        assert result.amount == Decimal("9.98")

    def test_fiat_to_fiat_fee(self):
        result = convert(100, "USD", "KRW")

        assert result.rate == Decimal("1330")
        assert result.fees == Decimal("665")
        assert result.amount == Decimal("132335")

    def test_same_currency_is_identity_rate(self):
        assert lookup_rate("USD", "usd") == Decimal(1)

    def test_unknown_pair(self):
        with pytest.raises(InvalidArgument):
            convert(1, "USD", "GBP")

    def test_non_positive_amount(self):
        with pytest.raises(InvalidArgument):
            convert(0, "USD", "KRW")


def test_published_rates_cover_krw_both_ways():
    pairs = {(rate.from_currency, rate.to_currency) for rate in KWAN_RATES}

    assert ("KRW", "KWAN") in pairs
    assert ("KWAN", "KRW") in pairs
