"""CouponUsage model: immutable audit row written when a coupon is redeemed."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    func,
)

from storefront.core.database import Base
from storefront.models.shared import MONEY, UUIDType, generate_uuid


class CouponUsage(Base):
    __tablename__ = "coupon_usages"
    __table_args__ = (
        UniqueConstraint("coupon_id", "order_id", name="uq_coupon_usages_coupon_order"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    coupon_id = Column(
        UUIDType, ForeignKey("coupons.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    order_id = Column(
        UUIDType, ForeignKey("orders.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    discount_amount = Column(MONEY, nullable=False)
    order_total_before_discount = Column(MONEY, nullable=False)
    order_total_after_discount = Column(MONEY, nullable=False)
    applied_products = Column(JSON, nullable=True)
    usage_context = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
