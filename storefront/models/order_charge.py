"""OrderCharge model for additional order-level fees (COD fee, handling, etc.)."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func

from storefront.core.database import Base
from storefront.models.shared import MONEY, PERCENT, UUIDType, generate_uuid


class OrderChargeType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    TIERED = "tiered"


class ChargeApplyTo(str, Enum):
    ALL = "all"
    COD_ONLY = "cod_only"
    ONLINE_ONLY = "online_only"
    SPECIFIC_PAYMENT_METHODS = "specific_payment_methods"
    CONDITIONAL = "conditional"


class OrderCharge(Base):
    """Additional charge added to an order when its scope and conditions match."""

    __tablename__ = "order_charges"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    amount = Column(MONEY, nullable=True)
    percentage = Column(PERCENT, nullable=True)
    tiers = Column(JSON, nullable=True)
    is_enabled = Column(Boolean, nullable=False, default=True)
    apply_to = Column(String(30), nullable=False, default=ChargeApplyTo.ALL.value)
    payment_methods = Column(JSON, nullable=True)
    conditions = Column(JSON, nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    display_label = Column(String(255), nullable=True)
    is_taxable = Column(Boolean, nullable=False, default=False)
    apply_after_discount = Column(Boolean, nullable=False, default=True)
    is_refundable = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
