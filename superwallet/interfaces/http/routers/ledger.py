"""Wallet balance, send and deposit endpoints."""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.container import ApplicationContainer
from superwallet.core.exceptions import ChainUnavailable
from superwallet.interfaces.http.deps import (
    get_app_container,
    get_balance_ledger,
    get_current_user,
    get_db_session,
    get_payment_service,
)
from superwallet.modules.accounts import User
from superwallet.modules.ledger import BalanceLedger
from superwallet.modules.payments import PaymentReceipt, PaymentService
from superwallet.schemas import BalanceResponse, DepositRequest, PaymentResponse, SendRequest, TransactionResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _payment_response(receipt: PaymentReceipt) -> PaymentResponse:
    return PaymentResponse(
        transaction=TransactionResponse.model_validate(receipt.transaction),
        previous_balance=receipt.previous_balance,
        new_balance=receipt.new_balance,
    )


@router.get("/balance", response_model=BalanceResponse, summary="Balance of an address")
async def get_balance(
    address: Optional[str] = Query(None, description="defaults to the demo wallet"),
    _: User = Depends(get_current_user),
    ledger: BalanceLedger = Depends(get_balance_ledger),
    container: ApplicationContainer = Depends(get_app_container),
) -> BalanceResponse:
    wallet = container.settings.wallet
    address = address or wallet.demo_address
    snapshot = await ledger.get_balance(address)
    if snapshot.updated_at is not None:
        return BalanceResponse(
            address=address,
            balance=snapshot.balance,
            asset_type=snapshot.asset_type,
            updated_at=snapshot.updated_at,
        )

    # no ledger row yet: report the on-chain balance when the chain answers
    try:
        on_chain = await asyncio.to_thread(container.chain.get_balance, address)
    except ChainUnavailable as exc:
        logger.warning("Chain balance lookup for %s failed: %s", address, exc.message)
        return BalanceResponse(address=address, balance=snapshot.balance, asset_type=wallet.ledger_asset)
    return BalanceResponse(address=address, balance=on_chain, asset_type=wallet.ledger_asset, source="chain")


@router.post("/send", response_model=PaymentResponse, summary="Send from the demo wallet")
async def send(
    payload: SendRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    payments: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    receipt = await payments.send(
        user_id=user.id,
        to_address=payload.to_address,
        amount=payload.amount,
        asset_type=payload.asset_type,
    )
    await db.commit()
    return _payment_response(receipt)


@router.post("/deposit", response_model=PaymentResponse, summary="Credit the demo wallet")
async def deposit(
    payload: DepositRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    payments: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    receipt = await payments.deposit(user_id=user.id, amount=payload.amount, asset_type=payload.asset_type)
    await db.commit()
    return _payment_response(receipt)
