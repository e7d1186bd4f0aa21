"""
Transaction recorder tests against SQLite.
"""
from decimal import Decimal

import pytest

from superwallet.core.exceptions import InvalidArgument, InvalidTransition
from superwallet.modules.transactions import NewTransaction, TransactionRecorder
from superwallet.modules.transactions.exceptions import DuplicateTransactionHashError, TransactionNotFoundError
from superwallet.modules.transactions.hashing import is_valid_tx_hash

FIXED_HASH = "0x" + "ab" * 32


def _send(**overrides):
    values = dict(
        user_id="user-1",
        from_address="0xfrom",
        to_address="0xto",
        asset_type="XP",
        amount=Decimal("0.5"),
        transaction_type="send",
    )
    values.update(overrides)
    return NewTransaction(**values)


class TestRecord:

    def test_generated_hash_and_defaults(self, run_db, hash_generator):
        async def scenario(factory):
            async with factory() as session:
                record = await TransactionRecorder.with_session(session, hash_generator).record(_send())
                await session.commit()
                return record

        record = run_db(scenario)

        assert record.tx_hash == "0x" + "0" * 63 + "1"
        assert is_valid_tx_hash(record.tx_hash)
        assert record.status == "pending"
        assert record.amount == Decimal("0.5")
        assert record.fee == Decimal(0)
        assert record.confirmed_at is None

    def test_duplicate_hash_never_overwrites(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                recorder = TransactionRecorder.with_session(session)
                first = await recorder.record(_send(tx_hash=FIXED_HASH))
                await session.commit()
            async with factory() as session:
                recorder = TransactionRecorder.with_session(session)
                with pytest.raises(DuplicateTransactionHashError):
                    await recorder.record(_send(tx_hash=FIXED_HASH, amount=9))
                await session.rollback()
            async with factory() as session:
                return first, await TransactionRecorder.with_session(session).get(first.id)

        first, stored = run_db(scenario)

        assert stored.amount == first.amount == Decimal("0.5")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": 0},
            {"amount": "-1"},
            {"amount": "0.000000001"},
            {"fee": -1},
            {"status": "settled"},
            {"transaction_type": "swap"},
            {"to_address": ""},
            {"tx_hash": "0xABC"},
        ],
    )
    def test_invalid_input(self, run_db, overrides):
        async def scenario(factory):
            async with factory() as session:
                with pytest.raises(InvalidArgument):
                    await TransactionRecorder.with_session(session).record(_send(**overrides))

        run_db(scenario)

    def test_history_is_newest_first_and_paginated(self, run_db, hash_generator):
        async def scenario(factory):
            async with factory() as session:
                recorder = TransactionRecorder.with_session(session, hash_generator)
                for amount in ("1", "2", "3"):
                    await recorder.record(_send(amount=amount))
                await recorder.record(_send(user_id="user-2"))
                await session.commit()
                return (
                    await recorder.list_by_user("user-1"),
                    await recorder.list_by_user("user-1", limit=1, offset=1),
                )

        history, page = run_db(scenario)

        assert [r.amount for r in history] == [Decimal(3), Decimal(2), Decimal(1)]
        assert [r.amount for r in page] == [Decimal(2)]


class TestUpdateStatus:

    def test_pending_to_completed_sets_confirmation(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                recorder = TransactionRecorder.with_session(session)
                record = await recorder.record(_send())
                updated = await recorder.update_status(record.id, "completed")
                with pytest.raises(InvalidTransition):
                    await recorder.update_status(record.id, "failed")
                return updated

        updated = run_db(scenario)

        assert updated.status == "completed"
        assert updated.confirmed_at is not None

    def test_missing_transaction(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                with pytest.raises(TransactionNotFoundError):
                    await TransactionRecorder.with_session(session).update_status(404, "failed")

        run_db(scenario)
