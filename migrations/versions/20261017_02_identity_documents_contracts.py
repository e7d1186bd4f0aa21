"""add identity, document and contract deployment tables

Revision ID: 8c3d4b1e7f20
Revises: 5e1f0a9c2b7d
Create Date: 2026-10-17 15:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8c3d4b1e7f20"
down_revision = "5e1f0a9c2b7d"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "dids",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("did_identifier", sa.String(length=128), nullable=False, unique=True),
        sa.Column("did_document", sa.Text(), nullable=False),
        sa.Column("public_key", sa.String(length=132), nullable=False),
        sa.Column("blockchain_tx_hash", sa.String(length=66)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True)),
        sa.Column("revoked_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_dids_user_id", "dids", ["user_id"])

    op.create_table(
        "credentials",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("did_id", sa.Integer(), sa.ForeignKey("dids.id"), nullable=False),
        sa.Column("credential_type", sa.String(length=50), nullable=False),
        sa.Column("credential_data", sa.Text(), nullable=False),
        sa.Column("issuer_did", sa.String(length=128), nullable=False),
        sa.Column("issuer_signature", sa.String(length=200), nullable=False),
        sa.Column("blockchain_tx_hash", sa.String(length=66)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="valid"),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True)),
        sa.Column("revoked_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_credentials_did_id", "credentials", ["did_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("document_type", sa.String(length=30), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("content_hash", sa.String(length=66), nullable=False),
        sa.Column("signatures", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("blockchain_tx_hash", sa.String(length=66)),
        sa.Column("ipfs_hash", sa.String(length=100)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_documents_user_id", "documents", ["user_id"])

    op.create_table(
        "contract_deployments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("contract_name", sa.String(length=100), nullable=False),
        sa.Column("contract_address", sa.String(length=42), unique=True),
        sa.Column("deployer_address", sa.String(length=42), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False, unique=True),
        sa.Column("block_number", sa.Integer(), nullable=False),
        sa.Column("gas_limit", sa.Integer(), nullable=False),
        sa.Column("gas_used", sa.Integer()),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("abi", sa.Text(), nullable=False),
        sa.Column("bytecode", sa.Text(), nullable=False),
        sa.Column("constructor_args", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("compilation_metadata", sa.Text()),
        sa.Column("deployment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("verified_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_contract_deployments_user_id", "contract_deployments", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_contract_deployments_user_id", table_name="contract_deployments")
    op.drop_table("contract_deployments")
    op.drop_index("ix_documents_user_id", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_credentials_did_id", table_name="credentials")
    op.drop_table("credentials")
    op.drop_index("ix_dids_user_id", table_name="dids")
    op.drop_table("dids")
