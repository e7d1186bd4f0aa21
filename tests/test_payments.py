"""
Send and deposit flows through the ledger and the recorder.
"""
from decimal import Decimal

import pytest

from superwallet.core.config import WalletSettings
from superwallet.core.exceptions import InsufficientBalance, InvalidArgument
from superwallet.modules.ledger import BalanceLedger
from superwallet.modules.payments import PaymentService
from superwallet.modules.transactions import TransactionRecorder

WALLET = WalletSettings()


class TestPayments:

    def test_deposit_then_send(self, run_db, hash_generator):
        async def scenario(factory):
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET, hash_generator)
                deposit = await payments.deposit(user_id="user-1", amount=1)
                sent = await payments.send(user_id="user-1", to_address="0xfriend", amount="0.4", asset_type="XP")
                await session.commit()
            async with factory() as session:
                snapshot = await BalanceLedger.with_session(session).get_balance(WALLET.demo_address)
            return deposit, sent, snapshot

        deposit, sent, snapshot = run_db(scenario)

        assert deposit.previous_balance == Decimal(0)
        assert deposit.new_balance == Decimal(1)
        assert deposit.transaction.transaction_type == "receive"
        assert deposit.transaction.from_address == "external"
        assert sent.previous_balance == Decimal(1)
        assert sent.new_balance == Decimal("0.6")
        assert sent.transaction.status == "completed"
        assert sent.transaction.from_address == WALLET.demo_address
        assert snapshot.balance == Decimal("0.6")

    def test_overdraft_records_nothing(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET)
                await payments.deposit(user_id="user-1", amount=1)
                await session.commit()
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET)
                with pytest.raises(InsufficientBalance):
                    await payments.send(user_id="user-1", to_address="0xfriend", amount=2, asset_type="XP")
                await session.rollback()
            async with factory() as session:
                return await TransactionRecorder.with_session(session).list_by_user("user-1")

        history = run_db(scenario)

        assert [t.transaction_type for t in history] == ["receive"]

    def test_other_assets_are_recorded_pending(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET)
                return await payments.send(user_id="user-1", to_address="0xfriend", amount=5, asset_type="KWAN")

        receipt = run_db(scenario)

        assert receipt.transaction.status == "pending"
        assert receipt.previous_balance is None
        assert receipt.new_balance is None

    @pytest.mark.parametrize("amount", [0, -1, "abc"])
    def test_amount_must_be_positive(self, run_db, amount):
        async def scenario(factory):
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET)
                with pytest.raises(InvalidArgument):
                    await payments.deposit(user_id="user-1", amount=amount)

        run_db(scenario)

    def test_other_asset_deposit_does_not_fund_the_ledger(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                payments = PaymentService.with_session(session, WALLET)
                deposit = await payments.deposit(user_id="user-1", amount=100, asset_type="ETH")
                with pytest.raises(InsufficientBalance):
                    await payments.send(user_id="user-1", to_address="0xfriend", amount=100, asset_type="XP")
                await session.rollback()
            async with factory() as session:
                snapshot = await BalanceLedger.with_session(session).get_balance(WALLET.demo_address)
            return deposit, snapshot

        deposit, snapshot = run_db(scenario)

        assert deposit.transaction.status == "pending"
        assert deposit.new_balance is None
        assert snapshot.balance == Decimal(0)
        assert snapshot.updated_at is None
