"""Tax refund estimation and application endpoints."""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_current_user, get_db_session, get_refund_workflow
from superwallet.modules.accounts import User
from superwallet.modules.refunds import RefundApplication, RefundNotFoundError, RefundWorkflow
from superwallet.modules.tax import assess_eligibility, estimate
from superwallet.schemas import (
    RefundCompleteRequest,
    RefundListResponse,
    RefundProcessRequest,
    RefundResponse,
    RefundStatisticsResponse,
    RefundStatusResponse,
    RefundStepResponse,
    RefundSubmitRequest,
    TaxEstimateRequest,
    TaxEstimateResponse,
)

router = APIRouter()


@router.post("/estimate", response_model=TaxEstimateResponse, summary="Estimate a refund without applying")
async def estimate_refund(payload: TaxEstimateRequest) -> TaxEstimateResponse:
    result = estimate(payload.gross_income, payload.tax_paid, payload.deductions)
    eligibility = assess_eligibility(
        result.gross_income,
        result.deductions,
        payload.refund_type,
        result.refund_amount,
    )
    return TaxEstimateResponse(
        gross_income=result.gross_income,
        tax_paid=result.tax_paid,
        deductions=result.deductions,
        taxable_income=result.taxable_income,
        tax_rate=result.tax_rate,
        calculated_tax=result.calculated_tax,
        refund_amount=result.refund_amount,
        effective_rate=result.effective_rate,
        eligibility_score=eligibility.score,
        processing_time=eligibility.processing_time,
        required_documents=list(eligibility.required_documents),
    )


@router.post(
    "/submit",
    response_model=RefundResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a refund application",
)
async def submit_refund(
    payload: RefundSubmitRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundResponse:
    refund = await workflow.submit(
        RefundApplication(
            user_id=user.id,
            gross_income=payload.gross_income,
            tax_paid=payload.tax_paid,
            deductions=payload.deductions,
            refund_type=payload.refund_type,
            tax_year=payload.tax_year,
            bank_account=payload.bank_account,
        )
    )
    await db.commit()
    return RefundResponse.model_validate(refund)


@router.get("/history", response_model=RefundListResponse, summary="Own applications, newest first")
async def refund_history(
    user: User = Depends(get_current_user),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundListResponse:
    refunds = await workflow.list_by_user(user.id)
    return RefundListResponse(
        total=len(refunds),
        refunds=[RefundResponse.model_validate(refund) for refund in refunds],
    )


@router.get("/statistics", response_model=RefundStatisticsResponse, summary="Refund totals for the current user")
async def refund_statistics(
    user: User = Depends(get_current_user),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundStatisticsResponse:
    return RefundStatisticsResponse.model_validate(await workflow.statistics(user.id))


@router.post("/{refund_id}/process", response_model=RefundResponse, summary="Approve or reject a pending refund")
async def process_refund(
    payload: RefundProcessRequest,
    refund_id: int = Path(..., ge=1),
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundResponse:
    refund = await workflow.process(refund_id, payload.action)
    await db.commit()
    return RefundResponse.model_validate(refund)


@router.post("/{refund_id}/complete", response_model=RefundResponse, summary="Mark an approved refund as paid out")
async def complete_refund(
    payload: RefundCompleteRequest,
    refund_id: int = Path(..., ge=1),
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundResponse:
    refund = await workflow.complete(refund_id, payload.disbursement_tx_hash)
    await db.commit()
    return RefundResponse.model_validate(refund)


@router.get("/{refund_id}/status", response_model=RefundStatusResponse, summary="Application progress")
async def refund_status(
    refund_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    workflow: RefundWorkflow = Depends(get_refund_workflow),
) -> RefundStatusResponse:
    refund = await workflow.get(refund_id)
    if refund.user_id != user.id:
        raise RefundNotFoundError(refund_id=refund_id)
    steps = await workflow.status_timeline(refund_id)
    return RefundStatusResponse(
        refund=RefundResponse.model_validate(refund),
        steps=[RefundStepResponse.model_validate(step) for step in steps],
    )
