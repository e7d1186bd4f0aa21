"""Tax refund workflow: pending -> approved | rejected, approved -> completed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument, InvalidTransition
from superwallet.core.money import from_cents, to_cents
from superwallet.infrastructure.database.models import TaxRefund as TaxRefundModel
from superwallet.infrastructure.database.repositories.refund_repository import SqlRefundRepository
from superwallet.modules.tax import estimate

from .exceptions import RefundNotFoundError
from .models import REFUND_ACTIONS, RefundApplication, RefundStatistics, RefundStep, TaxRefund
from .repository import RefundRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RefundWorkflow:
    repository: RefundRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "RefundWorkflow":
        return cls(SqlRefundRepository(session))

    async def submit(self, application: RefundApplication) -> TaxRefund:
        if not application.user_id:
            raise InvalidArgument("user_id is required", field="user_id")
        result = estimate(application.gross_income, application.tax_paid, application.deductions)
        model = await self.repository.add(
            {
                "user_id": application.user_id,
                "refund_type": application.refund_type,
                "tax_year": application.tax_year,
                "gross_income_cents": to_cents(result.gross_income, "gross_income"),
                "tax_paid_cents": to_cents(result.tax_paid, "tax_paid"),
                "deductions_cents": to_cents(result.deductions, "deductions"),
                "taxable_income_cents": to_cents(result.taxable_income, "taxable_income"),
                "calculated_tax_cents": to_cents(result.calculated_tax, "calculated_tax"),
                "tax_rate_bps": int(result.tax_rate * 10000),
                "refund_amount_cents": to_cents(result.refund_amount, "refund_amount"),
                "bank_account": application.bank_account,
                "status": "pending",
                "submitted_at": datetime.now(timezone.utc),
            }
        )
        logger.info(
            "Tax refund %s submitted by %s: refund %s at rate %s",
            model.id,
            model.user_id,
            result.refund_amount,
            result.tax_rate,
        )
        return self._to_domain(model)

    async def process(self, refund_id: int, action: str) -> TaxRefund:
        """Approve or reject a pending application."""
        status = REFUND_ACTIONS.get(action)
        if status is None:
            raise InvalidArgument(f"Unknown action: {action}", field="action")
        model = await self._transition(
            refund_id,
            from_status="pending",
            values={"status": status, "processed_at": datetime.now(timezone.utc)},
        )
        logger.info("Tax refund %s %s", refund_id, status)
        return self._to_domain(model)

    async def complete(self, refund_id: int, disbursement_tx_hash: str | None = None) -> TaxRefund:
        """Mark an approved refund as paid out."""
        model = await self._transition(
            refund_id,
            from_status="approved",
            values={
                "status": "completed",
                "completed_at": datetime.now(timezone.utc),
                "disbursement_tx_hash": disbursement_tx_hash,
            },
        )
        logger.info("Tax refund %s completed (disbursement %s)", refund_id, disbursement_tx_hash)
        return self._to_domain(model)

    async def get(self, refund_id: int) -> TaxRefund:
        model = await self.repository.get(refund_id)
        if model is None:
            raise RefundNotFoundError(refund_id=refund_id)
        return self._to_domain(model)

    async def list_by_user(self, user_id: str) -> list[TaxRefund]:
        rows = await self.repository.list_by_user(user_id)
        return [self._to_domain(row) for row in rows]

    async def statistics(self, user_id: str) -> RefundStatistics:
        refunds = await self.list_by_user(user_id)
        completed = [r for r in refunds if r.status == "completed"]
        total_refunded = sum((r.refund_amount for r in completed), Decimal(0))
        pending_amount = sum((r.refund_amount for r in refunds if r.status == "pending"), Decimal(0))
        if refunds:
            success_rate = (Decimal(len(completed)) / Decimal(len(refunds)) * 100).quantize(Decimal("0.01"))
        else:
            success_rate = Decimal("0.00")
        return RefundStatistics(
            total_refunded=total_refunded,
            total_applications=len(refunds),
            pending_amount=pending_amount,
            success_rate=success_rate,
        )

    async def status_timeline(self, refund_id: int) -> list[RefundStep]:
        refund = await self.get(refund_id)
        reviewed = refund.status != "pending"
        approved = refund.status in {"approved", "completed"}
        return [
            RefundStep("submitted", True, refund.submitted_at),
            RefundStep("under_review", reviewed, refund.processed_at if reviewed else None),
            RefundStep("approved", approved, refund.processed_at if approved else None),
            RefundStep("disbursed", refund.status == "completed", refund.completed_at),
        ]

    async def _transition(self, refund_id: int, *, from_status: str, values: dict) -> TaxRefundModel:
        model = await self.repository.transition(refund_id, from_status=from_status, values=values)
        if model is not None:
            return model
        current = await self.repository.get(refund_id)
        if current is None:
            raise RefundNotFoundError(refund_id=refund_id)
        raise InvalidTransition(
            f"Tax refund {refund_id} is {current.status}, expected {from_status}",
            refund_id=refund_id,
            current_status=current.status,
        )

    @staticmethod
    def _to_domain(model: TaxRefundModel) -> TaxRefund:
        return TaxRefund(
            id=model.id,
            user_id=model.user_id,
            refund_type=model.refund_type,
            tax_year=model.tax_year,
            gross_income=from_cents(model.gross_income_cents),
            tax_paid=from_cents(model.tax_paid_cents),
            deductions=from_cents(model.deductions_cents),
            taxable_income=from_cents(model.taxable_income_cents),
            calculated_tax=from_cents(model.calculated_tax_cents),
            tax_rate=Decimal(model.tax_rate_bps).scaleb(-4),
            refund_amount=from_cents(model.refund_amount_cents),
            bank_account=model.bank_account,
            status=model.status,
            submitted_at=model.submitted_at,
            processed_at=model.processed_at,
            disbursement_tx_hash=model.disbursement_tx_hash,
            completed_at=model.completed_at,
        )
