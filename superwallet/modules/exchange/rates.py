"""KWAN exchange rates and currency conversion."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from superwallet.core.exceptions import InvalidArgument
from superwallet.core.money import Numeric, to_decimal

KWAN = "KWAN"

CROSS_RATES: dict[str, dict[str, Decimal]] = {
    "KRW": {"KWAN": Decimal("0.001"), "USD": Decimal("0.00075"), "EUR": Decimal("0.00068"),
            "JPY": Decimal("0.11"), "CNY": Decimal("0.0052")},
    "KWAN": {"KRW": Decimal("1000"), "USD": Decimal("0.75"), "EUR": Decimal("0.68"),
             "JPY": Decimal("110"), "CNY": Decimal("5.2")},
    "USD": {"KRW": Decimal("1330"), "KWAN": Decimal("1.33"), "EUR": Decimal("0.91"),
            "JPY": Decimal("147"), "CNY": Decimal("7.0")},
    "EUR": {"KRW": Decimal("1470"), "KWAN": Decimal("1.47"), "USD": Decimal("1.10"),
            "JPY": Decimal("162"), "CNY": Decimal("7.7")},
    "JPY": {"KRW": Decimal("9.1"), "KWAN": Decimal("0.009"), "USD": Decimal("0.0068"),
            "EUR": Decimal("0.0062"), "CNY": Decimal("0.048")},
    "CNY": {"KRW": Decimal("192"), "KWAN": Decimal("0.19"), "USD": Decimal("0.14"),
            "EUR": Decimal("0.13"), "JPY": Decimal("21")},
}

KWAN_FEE_RATE = Decimal("0.002")
DEFAULT_FEE_RATE = Decimal("0.005")


@dataclass(frozen=True, slots=True)
class KwanRate:
    from_currency: str
    to_currency: str
    rate: Decimal
    spread: Decimal


# published quotes; the conversion table above is used for settlement
KWAN_RATES: tuple[KwanRate, ...] = (
    KwanRate("KRW", "KWAN", Decimal("0.001"), Decimal("0.005")),
    KwanRate("KWAN", "KRW", Decimal("1000"), Decimal("0.005")),
    KwanRate("USD", "KWAN", Decimal("1.3"), Decimal("0.01")),
    KwanRate("EUR", "KWAN", Decimal("1.4"), Decimal("0.01")),
    KwanRate("JPY", "KWAN", Decimal("0.009"), Decimal("0.01")),
    KwanRate("CNY", "KWAN", Decimal("0.18"), Decimal("0.015")),
)


@dataclass(frozen=True, slots=True)
class Conversion:
    original_amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    fees: Decimal
    amount: Decimal


def lookup_rate(from_currency: str, to_currency: str) -> Decimal:
    source = from_currency.upper()
    target = to_currency.upper()
    if source == target:
        if source not in CROSS_RATES:
            raise InvalidArgument(f"Unsupported currency: {from_currency}", field="from_currency")
        return Decimal(1)
    try:
        return CROSS_RATES[source][target]
    except KeyError:
        raise InvalidArgument(
            f"Unsupported currency pair: {from_currency}/{to_currency}",
            from_currency=from_currency,
            to_currency=to_currency,
        ) from None


def convert(amount: Numeric, from_currency: str, to_currency: str) -> Conversion:
    value = to_decimal(amount, "amount")
    if value <= 0:
        raise InvalidArgument("amount must be greater than zero", field="amount")
    source = from_currency.upper()
    target = to_currency.upper()
    rate = lookup_rate(source, target)
    converted = value * rate
    fee_rate = KWAN_FEE_RATE if KWAN in (source, target) else DEFAULT_FEE_RATE
    fees = converted * fee_rate
    return Conversion(
        original_amount=value,
        from_currency=source,
        to_currency=target,
        rate=rate,
        fees=fees,
        amount=converted - fees,
    )
