"""Transaction history endpoints."""
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_current_user, get_db_session, get_transaction_recorder
from superwallet.modules.accounts import User
from superwallet.modules.transactions import TransactionRecord, TransactionRecorder
from superwallet.modules.transactions.exceptions import TransactionNotFoundError
from superwallet.schemas import TransactionListResponse, TransactionResponse, TransactionStatusUpdate

router = APIRouter()


async def _owned(recorder: TransactionRecorder, transaction_id: int, user: User) -> TransactionRecord:
    record = await recorder.get(transaction_id)
    if record.user_id != user.id:
        raise TransactionNotFoundError(transaction_id=transaction_id)
    return record


@router.get("", response_model=TransactionListResponse, summary="Transaction history, newest first")
async def list_transactions(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    recorder: TransactionRecorder = Depends(get_transaction_recorder),
) -> TransactionListResponse:
    records = await recorder.list_by_user(user.id, limit=limit, offset=offset)
    return TransactionListResponse(
        total=len(records),
        transactions=[TransactionResponse.model_validate(record) for record in records],
    )


@router.get("/{transaction_id}", response_model=TransactionResponse, summary="Transaction detail")
async def get_transaction(
    transaction_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    recorder: TransactionRecorder = Depends(get_transaction_recorder),
) -> TransactionResponse:
    return TransactionResponse.model_validate(await _owned(recorder, transaction_id, user))


@router.patch("/{transaction_id}/status", response_model=TransactionResponse, summary="Settle a pending transaction")
async def update_transaction_status(
    payload: TransactionStatusUpdate,
    transaction_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    recorder: TransactionRecorder = Depends(get_transaction_recorder),
) -> TransactionResponse:
    await _owned(recorder, transaction_id, user)
    record = await recorder.update_status(transaction_id, payload.status)
    await db.commit()
    return TransactionResponse.model_validate(record)
