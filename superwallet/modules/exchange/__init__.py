"""Currency conversion to and from KWAN."""

from .rates import CROSS_RATES, KWAN_RATES, Conversion, KwanRate, convert, lookup_rate

__all__ = ["CROSS_RATES", "KWAN_RATES", "Conversion", "KwanRate", "convert", "lookup_rate"]
