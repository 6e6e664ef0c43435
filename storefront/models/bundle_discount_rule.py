"""BundleDiscountRule model for multi-product purchase discounts."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func

from storefront.core.database import Base
from storefront.models.shared import MONEY, PERCENT, UUIDType, generate_uuid


class BundleDiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class BundleDiscountRule(Base):
    __tablename__ = "bundle_discount_rules"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    min_products = Column(Integer, nullable=False, default=2)
    max_products = Column(Integer, nullable=True)
    discount_type = Column(String(20), nullable=False, default=BundleDiscountType.PERCENTAGE.value)
    discount_percentage = Column(PERCENT, nullable=False, default=0)
    fixed_discount = Column(MONEY, nullable=False, default=0)

    # NULL means the rule applies to every category / tier
    category_id = Column(Integer, nullable=True, index=True)
    customer_tier = Column(String(50), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=0)
    valid_from = Column(DateTime(timezone=True), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=True)
    conditions = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
