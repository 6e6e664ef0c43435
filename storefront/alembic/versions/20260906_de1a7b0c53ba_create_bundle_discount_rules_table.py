"""create bundle discount rules table

Revision ID: de1a7b0c53ba
Revises: cd0f6a9b42a9
Create Date: 2026-09-06 16:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "de1a7b0c53ba"
down_revision = "cd0f6a9b42a9"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bundle_discount_rules",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("min_products", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("max_products", sa.Integer(), nullable=True),
        sa.Column(
            "discount_type", sa.String(length=20), nullable=False, server_default="percentage"
        ),
        sa.Column(
            "discount_percentage",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "fixed_discount",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("customer_tier", sa.String(length=50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("conditions", sa.JSON(), nullable=True),
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
    )
    op.create_index(
        op.f("ix_bundle_discount_rules_category_id"),
        "bundle_discount_rules",
        ["category_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_bundle_discount_rules_category_id"), table_name="bundle_discount_rules")
    op.drop_table("bundle_discount_rules")
