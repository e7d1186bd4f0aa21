"""Balance ledger exports"""

from .memory import InMemoryBalanceRepository
from .models import BalanceSnapshot
from .service import BalanceLedger

__all__ = ["BalanceSnapshot", "BalanceLedger", "InMemoryBalanceRepository"]
