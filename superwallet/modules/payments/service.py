"""Send and deposit flows for the demo wallet address.

Both flows run inside the caller's session: the balance change and the
transaction record are committed together or not at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.config import WalletSettings
from superwallet.core.exceptions import InvalidArgument
from superwallet.core.money import Numeric, to_decimal
from superwallet.modules.ledger import BalanceLedger
from superwallet.modules.transactions import HashGenerator, NewTransaction, TransactionRecorder

from .models import PaymentReceipt

logger = logging.getLogger(__name__)

EXTERNAL_ADDRESS = "external"


@dataclass(slots=True)
class PaymentService:
    ledger: BalanceLedger
    recorder: TransactionRecorder
    wallet: WalletSettings

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        wallet: WalletSettings,
        hash_generator: HashGenerator | None = None,
    ) -> "PaymentService":
        return cls(
            ledger=BalanceLedger.with_session(session),
            recorder=TransactionRecorder.with_session(session, hash_generator),
            wallet=wallet,
        )

    async def send(self, *, user_id: str, to_address: str, amount: Numeric, asset_type: str) -> PaymentReceipt:
        value = self._positive(amount)
        if not to_address:
            raise InvalidArgument("to_address is required", field="to_address")

        if asset_type != self.wallet.ledger_asset:
            # assets outside the ledger are only recorded, pending external settlement
            record = await self.recorder.record(
                NewTransaction(
                    user_id=user_id,
                    from_address=self.wallet.demo_address,
                    to_address=to_address,
                    asset_type=asset_type,
                    amount=value,
                    transaction_type="send",
                    status="pending",
                )
            )
            return PaymentReceipt(transaction=record, previous_balance=None, new_balance=None)

        new_balance = await self.ledger.apply_delta(self.wallet.demo_address, -value, asset_type)
        record = await self.recorder.record(
            NewTransaction(
                user_id=user_id,
                from_address=self.wallet.demo_address,
                to_address=to_address,
                asset_type=asset_type,
                amount=value,
                transaction_type="send",
                status="completed",
            )
        )
        logger.info("User %s sent %s %s to %s", user_id, value, asset_type, to_address)
        return PaymentReceipt(transaction=record, previous_balance=new_balance + value, new_balance=new_balance)

    async def deposit(self, *, user_id: str, amount: Numeric, asset_type: str | None = None) -> PaymentReceipt:
        value = self._positive(amount)
        asset = asset_type or self.wallet.ledger_asset

        if asset != self.wallet.ledger_asset:
            # same rule as send: only the ledger asset is credited here
            record = await self.recorder.record(
                NewTransaction(
                    user_id=user_id,
                    from_address=EXTERNAL_ADDRESS,
                    to_address=self.wallet.demo_address,
                    asset_type=asset,
                    amount=value,
                    transaction_type="receive",
                    status="pending",
                )
            )
            logger.info("User %s deposit of %s %s recorded as pending", user_id, value, asset)
            return PaymentReceipt(transaction=record, previous_balance=None, new_balance=None)

        new_balance = await self.ledger.apply_delta(self.wallet.demo_address, value, asset)
        record = await self.recorder.record(
            NewTransaction(
                user_id=user_id,
                from_address=EXTERNAL_ADDRESS,
                to_address=self.wallet.demo_address,
                asset_type=asset,
                amount=value,
                transaction_type="receive",
                status="completed",
            )
        )
        logger.info("User %s deposited %s %s", user_id, value, asset)
        return PaymentReceipt(transaction=record, previous_balance=new_balance - value, new_balance=new_balance)

    @staticmethod
    def _positive(amount: Numeric):
        value = to_decimal(amount, "amount")
        if value <= 0:
            raise InvalidArgument("amount must be greater than zero", field="amount")
        return value
