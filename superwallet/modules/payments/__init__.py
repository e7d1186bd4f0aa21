"""Payment flows combining the ledger and the transaction recorder."""

from .models import PaymentReceipt
from .service import PaymentService

__all__ = ["PaymentReceipt", "PaymentService"]
