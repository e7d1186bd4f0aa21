"""Transaction recorder: append-only log of ledger mutations."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument, InvalidTransition
from superwallet.core.money import from_units, to_decimal, to_units
from superwallet.infrastructure.database.models import Transaction as TransactionModel
from superwallet.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository

from .exceptions import DuplicateTransactionHashError, TransactionNotFoundError
from .hashing import HashGenerator, RandomHashGenerator, is_valid_tx_hash
from .models import TRANSACTION_STATUSES, TRANSACTION_TYPES, NewTransaction, TransactionRecord
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

# pending is the only non-terminal status
_ALLOWED_TRANSITIONS = {"pending": {"completed", "failed"}}


@dataclass(slots=True)
class TransactionRecorder:
    repository: TransactionRepository
    hash_generator: HashGenerator = field(default_factory=RandomHashGenerator)

    @classmethod
    def with_session(cls, session: AsyncSession, hash_generator: HashGenerator | None = None) -> "TransactionRecorder":
        return cls(SqlTransactionRepository(session), hash_generator or RandomHashGenerator())

    async def record(self, transaction: NewTransaction) -> TransactionRecord:
        values = self._validate(transaction)
        tx_hash = transaction.tx_hash or self.hash_generator()
        if not is_valid_tx_hash(tx_hash):
            raise InvalidArgument("tx_hash must be 0x followed by 64 lowercase hex characters", field="tx_hash")
        if await self.repository.get_by_hash(tx_hash) is not None:
            raise DuplicateTransactionHashError(tx_hash=tx_hash)

        values["tx_hash"] = tx_hash
        values["created_at"] = datetime.now(timezone.utc)
        if values["status"] == "completed":
            values["confirmed_at"] = values["created_at"]
        try:
            model = await self.repository.add(values)
        except IntegrityError as exc:
            raise DuplicateTransactionHashError(tx_hash=tx_hash) from exc

        logger.info(
            "Recorded %s transaction %s for user %s (%s %s)",
            model.transaction_type,
            model.tx_hash,
            model.user_id,
            from_units(model.amount_units),
            model.asset_type,
        )
        return self._to_record(model)

    async def get(self, transaction_id: int) -> TransactionRecord:
        model = await self.repository.get(transaction_id)
        if model is None:
            raise TransactionNotFoundError(transaction_id=transaction_id)
        return self._to_record(model)

    async def list_by_user(self, user_id: str, limit: int = 50, offset: int = 0) -> list[TransactionRecord]:
        """Transactions owned by ``user_id``, most recent first."""
        if limit <= 0 or offset < 0:
            raise InvalidArgument("limit must be positive and offset non-negative")
        rows = await self.repository.list_by_user(user_id, limit, offset)
        return [self._to_record(row) for row in rows]

    async def update_status(self, transaction_id: int, status: str) -> TransactionRecord:
        if status not in TRANSACTION_STATUSES:
            raise InvalidArgument(f"Unknown status: {status}", field="status")
        current = await self.repository.get(transaction_id)
        if current is None:
            raise TransactionNotFoundError(transaction_id=transaction_id)
        if status not in _ALLOWED_TRANSITIONS.get(current.status, set()):
            raise InvalidTransition(
                f"Cannot move transaction from {current.status} to {status}",
                current_status=current.status,
            )

        confirmed_at = datetime.now(timezone.utc) if status == "completed" else None
        model = await self.repository.transition_status(
            transaction_id,
            from_status=current.status,
            to_status=status,
            confirmed_at=confirmed_at,
        )
        if model is None:
            raise InvalidTransition("Transaction status changed concurrently", current_status=current.status)
        logger.info("Transaction %s moved %s -> %s", transaction_id, current.status, status)
        return self._to_record(model)

    @staticmethod
    def _validate(transaction: NewTransaction) -> dict:
        amount = to_decimal(transaction.amount, "amount")
        fee = to_decimal(transaction.fee, "fee")
        if amount <= 0 or to_units(amount) == 0:
            raise InvalidArgument("amount must be greater than zero", field="amount")
        if fee < 0:
            raise InvalidArgument("fee must not be negative", field="fee")
        if transaction.status not in TRANSACTION_STATUSES:
            raise InvalidArgument(f"Unknown status: {transaction.status}", field="status")
        if transaction.transaction_type not in TRANSACTION_TYPES:
            raise InvalidArgument(
                f"Unknown transaction type: {transaction.transaction_type}",
                field="transaction_type",
            )
        for name in ("user_id", "from_address", "to_address", "asset_type"):
            if not getattr(transaction, name):
                raise InvalidArgument(f"{name} is required", field=name)

        return {
            "user_id": transaction.user_id,
            "from_address": transaction.from_address,
            "to_address": transaction.to_address,
            "asset_type": transaction.asset_type,
            "amount_units": to_units(amount),
            "fee_units": to_units(fee, "fee"),
            "status": transaction.status,
            "transaction_type": transaction.transaction_type,
            "block_number": transaction.block_number,
            "merchant_info": json.dumps(transaction.merchant_info) if transaction.merchant_info else None,
        }

    @staticmethod
    def _to_record(model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            user_id=model.user_id,
            from_address=model.from_address,
            to_address=model.to_address,
            asset_type=model.asset_type,
            amount=from_units(model.amount_units),
            fee=from_units(model.fee_units),
            tx_hash=model.tx_hash,
            status=model.status,
            transaction_type=model.transaction_type,
            created_at=model.created_at,
            block_number=model.block_number,
            merchant_info=json.loads(model.merchant_info) if model.merchant_info else None,
            confirmed_at=model.confirmed_at,
        )
