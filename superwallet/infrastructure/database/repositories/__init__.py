"""SQLAlchemy-backed repository implementations."""

from .balance_repository import SqlBalanceRepository
from .contract_repository import SqlContractRepository
from .document_repository import SqlDocumentRepository
from .identity_repository import SqlIdentityRepository
from .refund_repository import SqlRefundRepository
from .transaction_repository import SqlTransactionRepository
from .user_repository import SqlUserRepository
from .van_repository import SqlVanRepository

__all__ = [
    "SqlBalanceRepository",
    "SqlContractRepository",
    "SqlDocumentRepository",
    "SqlIdentityRepository",
    "SqlRefundRepository",
    "SqlTransactionRepository",
    "SqlUserRepository",
    "SqlVanRepository",
]
