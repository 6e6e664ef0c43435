"""create delivery options table

Revision ID: 9a7c3d6e1f76
Revises: 8f6b2c5d0e65
Create Date: 2026-09-04 14:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "9a7c3d6e1f76"
down_revision = "8f6b2c5d0e65"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "delivery_options",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("delivery_days_min", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("delivery_days_max", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "price_multiplier",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="1",
        ),
        sa.Column(
            "fixed_surcharge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("availability_zones", sa.JSON(), nullable=True),
        sa.Column("availability_conditions", sa.JSON(), nullable=True),
        sa.Column("cutoff_time", sa.String(length=8), nullable=True),
        sa.Column("restricted_days", sa.JSON(), nullable=True),
        sa.Column(
            "min_order_value",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
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
    op.create_index(op.f("ix_delivery_options_code"), "delivery_options", ["code"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_delivery_options_code"), table_name="delivery_options")
    op.drop_table("delivery_options")
