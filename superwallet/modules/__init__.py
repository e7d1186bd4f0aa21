"""Feature modules and their public exports."""

from . import accounts, exchange, ledger, payments, refunds, tax, transactions, van

__all__ = [
    "accounts",
    "exchange",
    "ledger",
    "payments",
    "refunds",
    "tax",
    "transactions",
    "van",
]
