"""VAN card payment endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_current_user, get_db_session, get_van_service
from superwallet.modules.accounts import User
from superwallet.modules.van import VanService
from superwallet.schemas import VanHistoryResponse, VanPaymentRequest, VanPaymentResponse

router = APIRouter()


@router.post(
    "/process",
    response_model=VanPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Approve a card payment",
)
async def process_payment(
    payload: VanPaymentRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    van: VanService = Depends(get_van_service),
) -> VanPaymentResponse:
    payment = await van.process_payment(
        user_id=user.id,
        amount=payload.amount,
        merchant_id=payload.merchant_id,
        currency=payload.currency,
        terminal_id=payload.terminal_id,
        provider=payload.provider,
        transaction_id=payload.transaction_id,
    )
    await db.commit()
    return VanPaymentResponse.model_validate(payment)


@router.get("/history", response_model=VanHistoryResponse, summary="Own VAN payments")
async def payment_history(
    status_filter: Optional[str] = Query(None, alias="status", description="status or 'all'"),
    user: User = Depends(get_current_user),
    van: VanService = Depends(get_van_service),
) -> VanHistoryResponse:
    payments = await van.list_by_user(user.id, status_filter)
    return VanHistoryResponse(
        total=len(payments),
        payments=[VanPaymentResponse.model_validate(payment) for payment in payments],
    )
