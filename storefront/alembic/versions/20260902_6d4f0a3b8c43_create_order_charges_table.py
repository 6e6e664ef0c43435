"""create order charges table

Revision ID: 6d4f0a3b8c43
Revises: 5c3e9f2a7b32
Create Date: 2026-09-02 09:10:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "6d4f0a3b8c43"
down_revision = "5c3e9f2a7b32"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "order_charges",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("percentage", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("tiers", sa.JSON(), nullable=True),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("apply_to", sa.String(length=30), nullable=False, server_default="all"),
        sa.Column("payment_methods", sa.JSON(), nullable=True),
        sa.Column("conditions", sa.JSON(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("display_label", sa.String(length=255), nullable=True),
        sa.Column("is_taxable", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("apply_after_discount", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_refundable", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index(op.f("ix_order_charges_code"), "order_charges", ["code"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_order_charges_code"), table_name="order_charges")
    op.drop_table("order_charges")
