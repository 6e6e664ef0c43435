"""create tax configurations table

Revision ID: 5c3e9f2a7b32
Revises: 4b2d8e1f6a21
Create Date: 2026-09-02 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5c3e9f2a7b32"
down_revision = "4b2d8e1f6a21"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tax_configurations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("tax_type", sa.String(length=20), nullable=False, server_default="gst"),
        sa.Column("rate", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_inclusive", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("apply_on", sa.String(length=30), nullable=False, server_default="subtotal"),
        sa.Column("conditions", sa.JSON(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("display_label", sa.String(length=255), nullable=True),
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
    op.create_index(
        op.f("ix_tax_configurations_code"), "tax_configurations", ["code"], unique=True
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_tax_configurations_code"), table_name="tax_configurations")
    op.drop_table("tax_configurations")
