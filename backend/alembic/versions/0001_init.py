"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bank_accounts",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("organization_name", sa.String(length=200), nullable=False),
        sa.Column("iban", sa.String(length=34), nullable=False),
        sa.Column("bic", sa.String(length=11), nullable=False),
        sa.Column("balance_cents", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("balance_cents >= 0", name="ck_bank_accounts_balance_non_negative"),
    )
    op.create_index("ix_bank_accounts_iban", "bank_accounts", ["iban"], unique=True)

    op.create_table(
        "transfers",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("counterparty_name", sa.String(length=200), nullable=False),
        sa.Column("counterparty_iban", sa.String(length=34), nullable=False),
        sa.Column("counterparty_bic", sa.String(length=11), nullable=False),
        sa.Column("amount_cents", sa.BigInteger(), nullable=False),
        sa.Column("bank_account_id", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False, server_default=sa.func.current_timestamp()),
        sa.CheckConstraint("amount_cents > 0", name="ck_transfers_amount_positive"),
        sa.ForeignKeyConstraint(["bank_account_id"], ["bank_accounts.id"], name="fk_transfers_bank_account_id"),
    )
    op.create_index("ix_transfers_bank_account_id", "transfers", ["bank_account_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_transfers_bank_account_id", table_name="transfers")
    op.drop_table("transfers")
    op.drop_index("ix_bank_accounts_iban", table_name="bank_accounts")
    op.drop_table("bank_accounts")
