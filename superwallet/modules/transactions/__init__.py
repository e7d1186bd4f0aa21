"""Transaction recorder exports"""

from .hashing import HashGenerator, RandomHashGenerator
from .models import NewTransaction, TransactionRecord
from .service import TransactionRecorder

__all__ = [
    "HashGenerator",
    "RandomHashGenerator",
    "NewTransaction",
    "TransactionRecord",
    "TransactionRecorder",
]
