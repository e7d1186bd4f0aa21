"""
Refund workflow tests against an in-memory repository.
"""
import asyncio
from decimal import Decimal
from itertools import count
from types import SimpleNamespace

import pytest

from superwallet.core.exceptions import InvalidArgument, InvalidTransition
from superwallet.modules.refunds import RefundApplication, RefundNotFoundError, RefundWorkflow


class InMemoryRefundRepository:
    def __init__(self):
        self.rows = {}
        self._ids = count(1)

    async def add(self, values):
        row = SimpleNamespace(id=next(self._ids), processed_at=None, disbursement_tx_hash=None, completed_at=None, **values)
        self.rows[row.id] = row
        return row

    async def get(self, refund_id):
        return self.rows.get(refund_id)

    async def list_by_user(self, user_id):
        rows = [row for row in self.rows.values() if row.user_id == user_id]
        return sorted(rows, key=lambda row: (row.submitted_at, row.id), reverse=True)

    async def transition(self, refund_id, *, from_status, values):
        row = self.rows.get(refund_id)
        if row is None or row.status != from_status:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        return row


@pytest.fixture
def workflow():
    return RefundWorkflow(InMemoryRefundRepository())


def run(coro):
    return asyncio.run(coro)


def _application(**overrides):
    values = dict(user_id="user-1", gross_income=10_000_000, tax_paid=1_000_000)
    values.update(overrides)
    return RefundApplication(**values)


class TestSubmit:

    def test_submission_stores_the_estimate(self, workflow):
        refund = run(workflow.submit(_application(tax_year=2025, bank_account="110-123")))

        assert refund.status == "pending"
        assert refund.tax_rate == Decimal("0.06")
        assert refund.calculated_tax == Decimal("600000")
        assert refund.refund_amount == Decimal("400000")
        assert refund.tax_year == 2025

    def test_invalid_income_is_rejected(self, workflow):
        with pytest.raises(InvalidArgument):
            run(workflow.submit(_application(gross_income=-1)))

    @pytest.mark.parametrize("gross_income", ["1e40", "1e17"])
    def test_amounts_beyond_storage_range_are_rejected(self, workflow, gross_income):
        with pytest.raises(InvalidArgument) as exc_info:
            run(workflow.submit(_application(gross_income=gross_income)))

        assert exc_info.value.details["field"] == "gross_income"
        assert workflow.repository.rows == {}


class TestTransitions:

    def test_approve_twice_is_an_invalid_transition(self, workflow):
        refund = run(workflow.submit(_application()))

        approved = run(workflow.process(refund.id, "approve"))
        with pytest.raises(InvalidTransition) as exc_info:
            run(workflow.process(refund.id, "approve"))

        assert approved.status == "approved"
        assert approved.processed_at is not None
        assert exc_info.value.details["current_status"] == "approved"

    def test_reject_is_terminal(self, workflow):
        refund = run(workflow.submit(_application()))
        run(workflow.process(refund.id, "reject"))

        with pytest.raises(InvalidTransition):
            run(workflow.complete(refund.id))

    def test_complete_requires_approval(self, workflow):
        refund = run(workflow.submit(_application()))

        with pytest.raises(InvalidTransition):
            run(workflow.complete(refund.id))

        run(workflow.process(refund.id, "approve"))
        completed = run(workflow.complete(refund.id, "0x" + "1" * 64))

        assert completed.status == "completed"
        assert completed.disbursement_tx_hash == "0x" + "1" * 64

    def test_unknown_action(self, workflow):
        refund = run(workflow.submit(_application()))

        with pytest.raises(InvalidArgument):
            run(workflow.process(refund.id, "escalate"))

    def test_unknown_refund(self, workflow):
        with pytest.raises(RefundNotFoundError):
            run(workflow.process(99, "approve"))


class TestReporting:

    def test_statistics(self, workflow):
        first = run(workflow.submit(_application()))
        run(workflow.submit(_application(gross_income=20_000_000, tax_paid=4_000_000)))
        run(workflow.submit(_application(user_id="someone-else")))
        run(workflow.process(first.id, "approve"))
        run(workflow.complete(first.id))

        stats = run(workflow.statistics("user-1"))

        assert stats.total_applications == 2
        assert stats.total_refunded == Decimal("400000")
        assert stats.pending_amount == Decimal("1000000")
        assert stats.success_rate == Decimal("50.00")

    def test_statistics_without_applications(self, workflow):
        stats = run(workflow.statistics("user-1"))

        assert stats.total_applications == 0
        assert stats.success_rate == Decimal(0)

    def test_status_timeline(self, workflow):
        refund = run(workflow.submit(_application()))
        pending_steps = run(workflow.status_timeline(refund.id))
        run(workflow.process(refund.id, "approve"))
        approved_steps = run(workflow.status_timeline(refund.id))

        assert [step.completed for step in pending_steps] == [True, False, False, False]
        assert [step.step for step in approved_steps] == ["submitted", "under_review", "approved", "disbursed"]
        assert [step.completed for step in approved_steps] == [True, True, True, False]
