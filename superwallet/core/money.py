"""Decimal parsing and integer base-unit conversion.

Ledger amounts are stored as integers scaled by 10^8 and fiat (KRW) amounts
as integers scaled by 10^2, so the database can add deltas without floating
point drift.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from superwallet.core.exceptions import InvalidArgument

Numeric = Union[Decimal, int, float, str]

LEDGER_DECIMALS = 8
FIAT_DECIMALS = 2
# stored amounts are signed 64-bit integers
MAX_UNITS = 2**63 - 1

_LEDGER_QUANTUM = Decimal(1).scaleb(-LEDGER_DECIMALS)
_FIAT_QUANTUM = Decimal(1).scaleb(-FIAT_DECIMALS)


def to_decimal(value: Numeric, field: str = "value") -> Decimal:
    """Parse ``value`` into a finite Decimal or raise ``InvalidArgument``."""
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be numeric", field=field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidArgument(f"{field} must be numeric", field=field) from exc
    else:
        raise InvalidArgument(f"{field} must be numeric", field=field)
    if not result.is_finite():
        raise InvalidArgument(f"{field} must be finite", field=field)
    return result


def _scaled(amount: Decimal, quantum: Decimal, decimals: int, field: str) -> int:
    try:
        units = int(amount.quantize(quantum, rounding=ROUND_HALF_UP).scaleb(decimals))
    except InvalidOperation as exc:
        raise InvalidArgument(f"{field} is out of range", field=field) from exc
    if not -MAX_UNITS <= units <= MAX_UNITS:
        raise InvalidArgument(f"{field} is out of range", field=field)
    return units


def to_units(amount: Decimal, field: str = "amount") -> int:
    return _scaled(amount, _LEDGER_QUANTUM, LEDGER_DECIMALS, field)


def from_units(units: int) -> Decimal:
    return Decimal(units).scaleb(-LEDGER_DECIMALS)


def to_cents(amount: Decimal, field: str = "amount") -> int:
    return _scaled(amount, _FIAT_QUANTUM, FIAT_DECIMALS, field)


def from_cents(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-FIAT_DECIMALS)


def unit_bounds(delta_units: int, max_units: int = MAX_UNITS) -> tuple[int, int]:
    """Range a stored balance must be in for ``delta_units`` to apply."""
    if delta_units >= 0:
        return 0, max_units - delta_units
    return -delta_units, max_units


def round_fiat(amount: Decimal) -> Decimal:
    return amount.quantize(_FIAT_QUANTUM, rounding=ROUND_HALF_UP)


__all__ = [
    "Numeric",
    "MAX_UNITS",
    "to_decimal",
    "to_units",
    "from_units",
    "to_cents",
    "from_cents",
    "round_fiat",
    "unit_bounds",
]
