"""VAN (card payment network) records."""

from .models import VanPayment
from .service import VanIdGenerator, VanService

__all__ = ["VanPayment", "VanIdGenerator", "VanService"]
