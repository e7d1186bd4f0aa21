"""Tax refund workflow exports"""

from .exceptions import RefundNotFoundError
from .models import RefundApplication, RefundStatistics, RefundStep, TaxRefund
from .service import RefundWorkflow

__all__ = [
    "RefundNotFoundError",
    "RefundApplication",
    "RefundStatistics",
    "RefundStep",
    "TaxRefund",
    "RefundWorkflow",
]
