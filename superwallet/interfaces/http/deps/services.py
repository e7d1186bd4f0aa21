"""Service providers built on the request session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.container import ApplicationContainer
from superwallet.infrastructure.database.repositories import SqlUserRepository
from superwallet.modules.accounts import AccountService
from superwallet.modules.contracts import ContractService
from superwallet.modules.documents import DocumentService
from superwallet.modules.identity import IdentityService
from superwallet.modules.ledger import BalanceLedger
from superwallet.modules.payments import PaymentService
from superwallet.modules.refunds import RefundWorkflow
from superwallet.modules.transactions import TransactionRecorder
from superwallet.modules.van import VanService

from .container import get_app_container
from .database import get_db_session


def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_account_service(repository: SqlUserRepository = Depends(get_user_repository)) -> AccountService:
    return AccountService(repository)


def get_balance_ledger(db: AsyncSession = Depends(get_db_session)) -> BalanceLedger:
    return BalanceLedger.with_session(db)


def get_transaction_recorder(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> TransactionRecorder:
    return TransactionRecorder.with_session(db, container.hash_generator)


def get_payment_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> PaymentService:
    return PaymentService.with_session(db, container.settings.wallet, container.hash_generator)


def get_refund_workflow(db: AsyncSession = Depends(get_db_session)) -> RefundWorkflow:
    return RefundWorkflow.with_session(db)


def get_van_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> VanService:
    return VanService.with_session(db, container.van_id_factory)


def get_identity_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> IdentityService:
    settings = container.settings
    return IdentityService.with_session(db, container.chain, settings.identity, settings.wallet.demo_address)


def get_document_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> DocumentService:
    return DocumentService.with_session(db, container.chain, container.settings.wallet.demo_address)


def get_contract_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> ContractService:
    return ContractService.with_session(db, container.chain, container.settings.wallet.demo_address)


__all__ = [
    "get_user_repository",
    "get_account_service",
    "get_balance_ledger",
    "get_transaction_recorder",
    "get_payment_service",
    "get_refund_workflow",
    "get_van_service",
    "get_identity_service",
    "get_document_service",
    "get_contract_service",
]
