"""create carrier services table

Revision ID: 7e5a1b4c9d54
Revises: 6d4f0a3b8c43
Create Date: 2026-09-03 11:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "7e5a1b4c9d54"
down_revision = "6d4f0a3b8c43"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "carrier_services",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("carrier_name", sa.String(length=255), nullable=False),
        sa.Column("service_tier", sa.String(length=20), nullable=False, server_default="surface"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
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
    op.create_index(op.f("ix_carrier_services_code"), "carrier_services", ["code"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_carrier_services_code"), table_name="carrier_services")
    op.drop_table("carrier_services")
