"""create carrier rate cards table

Revision ID: 8f6b2c5d0e65
Revises: 7e5a1b4c9d54
Create Date: 2026-09-03 11:10:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8f6b2c5d0e65"
down_revision = "7e5a1b4c9d54"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "carrier_rate_cards",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("carrier_service_id", sa.String(length=36), nullable=False),
        sa.Column("zone_code", sa.String(length=20), nullable=False),
        sa.Column(
            "weight_min",
            sa.Numeric(precision=10, scale=3),
            nullable=False,
            server_default="0",
        ),
        sa.Column("weight_max", sa.Numeric(precision=10, scale=3), nullable=True),
        sa.Column(
            "base_rate",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "additional_per_kg",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "additional_per_500g",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "fuel_surcharge_percent",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "gst_percent",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "handling_charge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "oda_charge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "cod_charge_fixed",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "cod_charge_percent",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "min_cod_charge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "insurance_percent",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "min_insurance_charge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "rto_charge",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column(
            "rto_percent",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="0",
        ),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=True),
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
        sa.ForeignKeyConstraint(
            ["carrier_service_id"], ["carrier_services.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_carrier_rate_cards_carrier_service_id"),
        "carrier_rate_cards",
        ["carrier_service_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_carrier_rate_cards_zone_code"), "carrier_rate_cards", ["zone_code"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_carrier_rate_cards_zone_code"), table_name="carrier_rate_cards")
    op.drop_index(
        op.f("ix_carrier_rate_cards_carrier_service_id"), table_name="carrier_rate_cards"
    )
    op.drop_table("carrier_rate_cards")
