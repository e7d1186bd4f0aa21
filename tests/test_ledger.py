"""
Balance ledger tests against SQLite and the in-memory repository.
"""
import asyncio
from decimal import Decimal

import pytest

from superwallet.core.exceptions import InsufficientBalance, InvalidArgument
from superwallet.core.money import MAX_UNITS, from_units
from superwallet.modules.ledger import BalanceLedger, InMemoryBalanceRepository


async def _apply(factory, address, delta):
    async with factory() as session:
        balance = await BalanceLedger.with_session(session).apply_delta(address, delta, "XP")
        await session.commit()
        return balance


async def _balance(factory, address):
    async with factory() as session:
        return await BalanceLedger.with_session(session).get_balance(address)


class TestApplyDelta:

    def test_first_credit_creates_the_row(self, run_db):
        async def scenario(factory):
            new_balance = await _apply(factory, "addr1", Decimal("1.5"))
            return new_balance, await _balance(factory, "addr1")

        new_balance, snapshot = run_db(scenario)

        assert new_balance == Decimal("1.5")
        assert snapshot.balance == Decimal("1.5")
        assert snapshot.asset_type == "XP"
        assert snapshot.updated_at is not None

    def test_sequence_of_deltas_sums(self, run_db):
        async def scenario(factory):
            for delta in ("2", "-0.5", "0.25", "-1.75"):
                await _apply(factory, "addr1", delta)
            return await _balance(factory, "addr1")

        assert run_db(scenario).balance == Decimal(0)

    def test_overdraft_is_rejected_and_balance_kept(self, run_db):
        async def scenario(factory):
            await _apply(factory, "addr1", 3)
            with pytest.raises(InsufficientBalance) as exc_info:
                await _apply(factory, "addr1", -5)
            return exc_info.value, await _balance(factory, "addr1")

        error, snapshot = run_db(scenario)

        assert error.current_balance == Decimal(3)
        assert error.requested_amount == Decimal(5)
        assert error.to_dict()["error"] == "insufficient_balance"
        assert snapshot.balance == Decimal(3)

    def test_debit_on_unknown_address(self, run_db):
        async def scenario(factory):
            with pytest.raises(InsufficientBalance) as exc_info:
                await _apply(factory, "nobody", -1)
            return exc_info.value, await _balance(factory, "nobody")

        error, snapshot = run_db(scenario)

        assert error.current_balance == Decimal(0)
        assert snapshot.updated_at is None

    def test_zero_delta_on_unknown_address_creates_nothing(self, run_db):
        async def scenario(factory):
            balance = await _apply(factory, "nobody", 0)
            return balance, await _balance(factory, "nobody")

        balance, snapshot = run_db(scenario)

        assert balance == Decimal(0)
        assert snapshot.updated_at is None

    def test_empty_address(self, run_db):
        async def scenario(factory):
            with pytest.raises(InvalidArgument):
                await _apply(factory, "", 1)

        run_db(scenario)

    def test_delta_below_precision_is_rejected(self, run_db):
        async def scenario(factory):
            await _apply(factory, "addr1", 1)
            with pytest.raises(InvalidArgument) as exc_info:
                await _apply(factory, "addr1", Decimal("1e-9"))
            return exc_info.value, await _balance(factory, "addr1")

        error, snapshot = run_db(scenario)

        assert error.details["field"] == "delta"
        assert snapshot.balance == Decimal(1)

    def test_other_asset_is_rejected_on_existing_row(self, run_db):
        async def scenario(factory):
            await _apply(factory, "addr1", 2)
            async with factory() as session:
                with pytest.raises(InvalidArgument) as exc_info:
                    await BalanceLedger.with_session(session).apply_delta("addr1", 5, "ETH")
            return exc_info.value, await _balance(factory, "addr1")

        error, snapshot = run_db(scenario)

        assert error.details["stored_asset_type"] == "XP"
        assert snapshot.balance == Decimal(2)
        assert snapshot.asset_type == "XP"

    @pytest.mark.parametrize("delta", ["1e40", "1e11", "-1e40"])
    def test_out_of_range_delta_is_rejected(self, run_db, delta):
        async def scenario(factory):
            with pytest.raises(InvalidArgument):
                await _apply(factory, "addr1", delta)

        run_db(scenario)

    def test_credit_past_the_maximum_is_rejected(self, run_db):
        near_max = from_units(MAX_UNITS - 10)

        async def scenario(factory):
            await _apply(factory, "addr1", near_max)
            with pytest.raises(InvalidArgument):
                await _apply(factory, "addr1", 1)
            return await _balance(factory, "addr1")

        assert run_db(scenario).balance == near_max

    def test_concurrent_debits_never_overdraw(self, run_db):
        """Ten debits of 1 against a balance of 5: exactly five succeed."""

        async def debit(factory):
            async with factory() as session:
                try:
                    await BalanceLedger.with_session(session).apply_delta("shared", -1, "XP")
                except InsufficientBalance:
                    await session.rollback()
                    return False
                await session.commit()
                return True

        async def scenario(factory):
            await _apply(factory, "shared", 5)
            results = await asyncio.gather(*(debit(factory) for _ in range(10)))
            return results, await _balance(factory, "shared")

        results, snapshot = run_db(scenario)

        assert results.count(True) == 5
        assert snapshot.balance == Decimal(0)


class TestInMemoryLedger:

    def test_concurrent_debits_queue_on_the_address_lock(self):
        repository = InMemoryBalanceRepository()
        ledger = BalanceLedger(repository)

        async def debit():
            try:
                await ledger.apply_delta("shared", -1, "XP")
            except InsufficientBalance:
                return False
            return True

        async def scenario():
            await ledger.apply_delta("shared", 5, "XP")
            await ledger.apply_delta("other", 1, "XP")
            results = await asyncio.gather(*(debit() for _ in range(10)))
            return results, await ledger.get_balance("shared"), await ledger.get_balance("other")

        results, shared, other = asyncio.run(scenario())

        assert results.count(True) == 5
        assert shared.balance == Decimal(0)
        assert other.balance == Decimal(1)

    def test_overdraft_and_asset_rules_match_the_sql_ledger(self):
        ledger = BalanceLedger(InMemoryBalanceRepository())

        async def scenario():
            await ledger.apply_delta("addr1", 3, "XP")
            with pytest.raises(InsufficientBalance):
                await ledger.apply_delta("addr1", -5, "XP")
            with pytest.raises(InvalidArgument):
                await ledger.apply_delta("addr1", 1, "ETH")
            return await ledger.get_balance("addr1")

        snapshot = asyncio.run(scenario())

        assert snapshot.balance == Decimal(3)
        assert snapshot.asset_type == "XP"
