"""create shipping insurance table

Revision ID: ab8d4e7f2087
Revises: 9a7c3d6e1f76
Create Date: 2026-09-04 14:10:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "ab8d4e7f2087"
down_revision = "9a7c3d6e1f76"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "shipping_insurance",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "min_order_value",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("max_order_value", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column(
            "coverage_percentage",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="100",
        ),
        sa.Column(
            "premium_percentage",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "minimum_premium",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("maximum_premium", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("conditions", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("claim_processing_days", sa.Integer(), nullable=False, server_default="7"),
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


def downgrade() -> None:
    op.drop_table("shipping_insurance")
