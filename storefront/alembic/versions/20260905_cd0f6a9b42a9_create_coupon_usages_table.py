"""create coupon usages table

Revision ID: cd0f6a9b42a9
Revises: bc9e5f8a3198
Create Date: 2026-09-05 08:40:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "cd0f6a9b42a9"
down_revision = "bc9e5f8a3198"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "coupon_usages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("coupon_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("discount_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            "order_total_before_discount", sa.Numeric(precision=12, scale=2), nullable=False
        ),
        sa.Column(
            "order_total_after_discount", sa.Numeric(precision=12, scale=2), nullable=False
        ),
        sa.Column("applied_products", sa.JSON(), nullable=True),
        sa.Column("usage_context", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(["coupon_id"], ["coupons.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("coupon_id", "order_id", name="uq_coupon_usages_coupon_order"),
    )
    op.create_index(op.f("ix_coupon_usages_coupon_id"), "coupon_usages", ["coupon_id"])
    op.create_index(op.f("ix_coupon_usages_customer_id"), "coupon_usages", ["customer_id"])
    op.create_index(op.f("ix_coupon_usages_order_id"), "coupon_usages", ["order_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_coupon_usages_order_id"), table_name="coupon_usages")
    op.drop_index(op.f("ix_coupon_usages_customer_id"), table_name="coupon_usages")
    op.drop_index(op.f("ix_coupon_usages_coupon_id"), table_name="coupon_usages")
    op.drop_table("coupon_usages")
