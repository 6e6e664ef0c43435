"""Coupon model for promotional discounts."""

from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    func,
)

from storefront.core.database import Base
from storefront.models.shared import MONEY, UUIDType, generate_uuid


class CouponType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_SHIPPING = "free_shipping"
    BUY_X_GET_Y = "buy_x_get_y"


class Coupon(Base):
    """Coupon model for promotional discounts."""

    __tablename__ = "coupons"
    __table_args__ = (
        CheckConstraint(
            "usage_limit IS NULL OR usage_count <= usage_limit",
            name="ck_coupons_usage_within_limit",
        ),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    type = Column(String(20), nullable=False)
    value = Column(MONEY, nullable=False, default=0)
    minimum_order_amount = Column(MONEY, nullable=True)
    maximum_discount_amount = Column(MONEY, nullable=True)

    usage_limit = Column(Integer, nullable=True)
    usage_limit_per_customer = Column(Integer, nullable=True)
    usage_count = Column(Integer, nullable=False, default=0)

    starts_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_stackable = Column(Boolean, nullable=False, default=False)

    applicable_products = Column(JSON, nullable=True)
    applicable_categories = Column(JSON, nullable=True)
    applicable_customer_groups = Column(JSON, nullable=True)
    excluded_products = Column(JSON, nullable=True)
    excluded_categories = Column(JSON, nullable=True)
    first_order_only = Column(Boolean, nullable=False, default=False)
    buy_x_get_y_config = Column(JSON, nullable=True)
    day_time_restrictions = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
