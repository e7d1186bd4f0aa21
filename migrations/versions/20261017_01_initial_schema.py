"""initial wallet schema

Revision ID: 5e1f0a9c2b7d
Revises: 
Create Date: 2026-10-17 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5e1f0a9c2b7d"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100)),
        sa.Column("last_name", sa.String(length=100)),
        sa.Column("nationality", sa.String(length=2)),
        sa.Column("wallet_address", sa.String(length=66), unique=True),
        sa.Column("language", sa.String(length=10), nullable=False, server_default="ko"),
        sa.Column("country", sa.String(length=2), nullable=False, server_default="KR"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "wallet_balances",
        sa.Column("address", sa.String(length=66), primary_key=True),
        sa.Column("balance_units", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("asset_type", sa.String(length=20), nullable=False, server_default="XP"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance_units >= 0", name="ck_wallet_balances_non_negative"),
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("from_address", sa.String(length=66), nullable=False),
        sa.Column("to_address", sa.String(length=66), nullable=False),
        sa.Column("asset_type", sa.String(length=20), nullable=False),
        sa.Column("amount_units", sa.BigInteger(), nullable=False),
        sa.Column("fee_units", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("block_number", sa.Integer()),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("transaction_type", sa.String(length=20), nullable=False),
        sa.Column("merchant_info", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_tx_hash", "transactions", ["tx_hash"], unique=True)

    op.create_table(
        "tax_refunds",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("refund_type", sa.String(length=50), nullable=False, server_default="income_tax"),
        sa.Column("tax_year", sa.Integer()),
        sa.Column("gross_income_cents", sa.BigInteger(), nullable=False),
        sa.Column("tax_paid_cents", sa.BigInteger(), nullable=False),
        sa.Column("deductions_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("taxable_income_cents", sa.BigInteger(), nullable=False),
        sa.Column("calculated_tax_cents", sa.BigInteger(), nullable=False),
        sa.Column("tax_rate_bps", sa.Integer(), nullable=False),
        sa.Column("refund_amount_cents", sa.BigInteger(), nullable=False),
        sa.Column("bank_account", sa.String(length=100)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
        sa.Column("disbursement_tx_hash", sa.String(length=66)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_tax_refunds_user_id", "tax_refunds", ["user_id"])

    op.create_table(
        "van_transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("transaction_id", sa.Integer(), sa.ForeignKey("transactions.id")),
        sa.Column("van_provider", sa.String(length=50), nullable=False),
        sa.Column("merchant_id", sa.String(length=100), nullable=False),
        sa.Column("terminal_id", sa.String(length=100)),
        sa.Column("van_tx_id", sa.String(length=64), nullable=False, unique=True),
        sa.Column("amount_cents", sa.BigInteger(), nullable=False),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="KRW"),
        sa.Column("exchange_rate", sa.String(length=32)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_van_transactions_user_id", "van_transactions", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_van_transactions_user_id", table_name="van_transactions")
    op.drop_table("van_transactions")
    op.drop_index("ix_tax_refunds_user_id", table_name="tax_refunds")
    op.drop_table("tax_refunds")
    op.drop_index("ix_transactions_tx_hash", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("wallet_balances")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
