"""CouponUsage repository for data access."""

from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.coupon_usage import CouponUsage


class CouponUsageRepository:
    """Repository for CouponUsage model.

    Usage rows are immutable: there is no update or delete.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        coupon_id: UUID,
        customer_id: UUID,
        order_id: UUID,
        discount_amount: Decimal,
        order_total_before_discount: Decimal,
        order_total_after_discount: Decimal,
        applied_products: list[int] | None = None,
        usage_context: dict[str, Any] | None = None,
    ) -> CouponUsage:
        """Stage a usage row in the current transaction.

        Flushes but does not commit, so the caller can commit it together with
        the usage_count increment.
        """
        usage = CouponUsage(
            coupon_id=coupon_id,
            customer_id=customer_id,
            order_id=order_id,
            discount_amount=discount_amount,
            order_total_before_discount=order_total_before_discount,
            order_total_after_discount=order_total_after_discount,
            applied_products=applied_products,
            usage_context=usage_context,
        )
        self.db.add(usage)
        self.db.flush()
        return usage

    def get_by_coupon_id(
        self, coupon_id: UUID, skip: int = 0, limit: int = 100
    ) -> list[CouponUsage]:
        return (
            self.db.query(CouponUsage)
            .filter(CouponUsage.coupon_id == coupon_id)
            .order_by(CouponUsage.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_coupon_and_order(self, coupon_id: UUID, order_id: UUID) -> CouponUsage | None:
        return (
            self.db.query(CouponUsage)
            .filter(CouponUsage.coupon_id == coupon_id, CouponUsage.order_id == order_id)
            .first()
        )

    def count_by_coupon(self, coupon_id: UUID) -> int:
        return (
            self.db.query(func.count(CouponUsage.id))
            .filter(CouponUsage.coupon_id == coupon_id)
            .scalar()
            or 0
        )

    def count_by_customer(self, coupon_id: UUID, customer_id: UUID) -> int:
        """Count how many times a customer has used a coupon."""
        return (
            self.db.query(func.count(CouponUsage.id))
            .filter(CouponUsage.coupon_id == coupon_id, CouponUsage.customer_id == customer_id)
            .scalar()
            or 0
        )

    def total_discount(self, coupon_id: UUID) -> Decimal:
        """Sum of discount_amount over every usage of a coupon."""
        total = (
            self.db.query(func.coalesce(func.sum(CouponUsage.discount_amount), 0))
            .filter(CouponUsage.coupon_id == coupon_id)
            .scalar()
        )
        return Decimal(str(total))
