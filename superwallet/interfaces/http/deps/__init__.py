"""Reusable FastAPI dependencies."""

from .auth import get_current_user
from .container import get_app_container
from .database import get_db_session
from .services import (
    get_account_service,
    get_balance_ledger,
    get_contract_service,
    get_document_service,
    get_identity_service,
    get_payment_service,
    get_refund_workflow,
    get_transaction_recorder,
    get_user_repository,
    get_van_service,
)

__all__ = [
    "get_current_user",
    "get_app_container",
    "get_db_session",
    "get_account_service",
    "get_balance_ledger",
    "get_contract_service",
    "get_document_service",
    "get_identity_service",
    "get_payment_service",
    "get_refund_workflow",
    "get_transaction_recorder",
    "get_user_repository",
    "get_van_service",
]
