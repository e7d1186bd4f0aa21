"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from superwallet.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    nationality = Column(String(2))
    wallet_address = Column(String(66), unique=True)
    language = Column(String(10), nullable=False, default="ko")
    country = Column(String(2), nullable=False, default="KR")
    is_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class WalletBalance(Base):
    __tablename__ = "wallet_balances"
    __table_args__ = (CheckConstraint("balance_units >= 0", name="ck_wallet_balances_non_negative"),)

    address = Column(String(66), primary_key=True)
    balance_units = Column(BigInteger, nullable=False, default=0)
    asset_type = Column(String(20), nullable=False, default="XP")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    from_address = Column(String(66), nullable=False)
    to_address = Column(String(66), nullable=False)
    asset_type = Column(String(20), nullable=False)
    amount_units = Column(BigInteger, nullable=False)
    fee_units = Column(BigInteger, nullable=False, default=0)
    tx_hash = Column(String(66), nullable=False, unique=True, index=True)
    block_number = Column(Integer)
    status = Column(String(20), nullable=False, default="pending")
    transaction_type = Column(String(20), nullable=False)
    merchant_info = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    confirmed_at = Column(DateTime(timezone=True))


class TaxRefund(Base):
    __tablename__ = "tax_refunds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    refund_type = Column(String(50), nullable=False, default="income_tax")
    tax_year = Column(Integer)
    gross_income_cents = Column(BigInteger, nullable=False)
    tax_paid_cents = Column(BigInteger, nullable=False)
    deductions_cents = Column(BigInteger, nullable=False, default=0)
    taxable_income_cents = Column(BigInteger, nullable=False)
    calculated_tax_cents = Column(BigInteger, nullable=False)
    tax_rate_bps = Column(Integer, nullable=False)
    refund_amount_cents = Column(BigInteger, nullable=False)
    bank_account = Column(String(100))
    status = Column(String(20), nullable=False, default="pending")
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    processed_at = Column(DateTime(timezone=True))
    disbursement_tx_hash = Column(String(66))
    completed_at = Column(DateTime(timezone=True))


class VanTransaction(Base):
    __tablename__ = "van_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"))
    van_provider = Column(String(50), nullable=False)
    merchant_id = Column(String(100), nullable=False)
    terminal_id = Column(String(100))
    van_tx_id = Column(String(64), nullable=False, unique=True)
    amount_cents = Column(BigInteger, nullable=False)
    currency = Column(String(10), nullable=False, default="KRW")
    exchange_rate = Column(String(32))
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    processed_at = Column(DateTime(timezone=True))


class Did(Base):
    __tablename__ = "dids"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    did_identifier = Column(String(128), nullable=False, unique=True)
    did_document = Column(Text, nullable=False)
    public_key = Column(String(132), nullable=False)
    blockchain_tx_hash = Column(String(66))
    status = Column(String(20), nullable=False, default="pending")
    issued_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(DateTime(timezone=True))
    revoked_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Credential(Base):
    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    did_id = Column(Integer, ForeignKey("dids.id"), nullable=False, index=True)
    credential_type = Column(String(50), nullable=False)
    credential_data = Column(Text, nullable=False)
    issuer_did = Column(String(128), nullable=False)
    issuer_signature = Column(String(200), nullable=False)
    blockchain_tx_hash = Column(String(66))
    status = Column(String(20), nullable=False, default="valid")
    issued_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(DateTime(timezone=True))
    revoked_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    document_type = Column(String(30), nullable=False)
    content = Column(Text, nullable=False)
    content_hash = Column(String(66), nullable=False)
    signatures = Column(Text, nullable=False, default="[]")
    blockchain_tx_hash = Column(String(66))
    ipfs_hash = Column(String(100))
    status = Column(String(20), nullable=False, default="draft")
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ContractDeployment(Base):
    __tablename__ = "contract_deployments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    contract_name = Column(String(100), nullable=False)
    contract_address = Column(String(42), unique=True)
    deployer_address = Column(String(42), nullable=False)
    tx_hash = Column(String(66), nullable=False, unique=True)
    block_number = Column(Integer, nullable=False)
    gas_limit = Column(Integer, nullable=False)
    gas_used = Column(Integer)
    status = Column(String(20), nullable=False, default="pending")
    abi = Column(Text, nullable=False)
    bytecode = Column(Text, nullable=False)
    constructor_args = Column(Text, nullable=False, default="[]")
    compilation_metadata = Column(Text)
    deployment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    verified_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
