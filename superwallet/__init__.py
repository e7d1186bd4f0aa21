"""Super wallet backend: balance ledger, transaction records and tax refunds."""

__version__ = "0.3.0"
