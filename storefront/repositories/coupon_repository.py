"""Coupon repository for data access."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.coupon import Coupon
from storefront.schemas.coupon import CouponCreate, CouponUpdate
from storefront.schemas.shared import to_column_values

JSON_FIELDS = {
    "applicable_products",
    "applicable_categories",
    "applicable_customer_groups",
    "excluded_products",
    "excluded_categories",
    "buy_x_get_y_config",
    "day_time_restrictions",
}


class CouponRepository:
    """Repository for Coupon model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        is_active: bool | None = None,
        order_by: str | None = None,
    ) -> list[Coupon]:
        """Get all coupons with optional filters."""
        query = self.db.query(Coupon)

        if is_active is not None:
            query = query.filter(Coupon.is_active.is_(is_active))

        query = apply_order_by(query, Coupon, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, is_active: bool | None = None) -> int:
        query = self.db.query(func.count(Coupon.id))
        if is_active is not None:
            query = query.filter(Coupon.is_active.is_(is_active))
        return query.scalar() or 0

    def get_by_id(self, coupon_id: UUID) -> Coupon | None:
        return self.db.query(Coupon).filter(Coupon.id == coupon_id).first()

    def get_by_code(self, code: str) -> Coupon | None:
        return self.db.query(Coupon).filter(Coupon.code == code).first()

    def get_expiring_between(self, start: datetime, end: datetime) -> list[Coupon]:
        """Get active coupons whose expiry falls inside [start, end]."""
        return (
            self.db.query(Coupon)
            .filter(
                Coupon.is_active.is_(True),
                Coupon.expires_at.isnot(None),
                Coupon.expires_at >= start,
                Coupon.expires_at <= end,
            )
            .order_by(Coupon.expires_at.asc())
            .all()
        )

    def create(self, data: CouponCreate) -> Coupon:
        """Create a new coupon."""
        coupon = Coupon(**to_column_values(data, JSON_FIELDS))
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def update(self, code: str, data: CouponUpdate) -> Coupon | None:
        """Update a coupon by code."""
        coupon = self.get_by_code(code)
        if not coupon:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(coupon, key, value)

        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def increment_usage(self, coupon_id: UUID) -> bool:
        """Bump usage_count by one unless that would pass usage_limit.

        The limit check and the increment are a single conditional UPDATE, so
        two concurrent redemptions cannot both take the last use. Returns False
        when no row was updated. Does not commit.
        """
        stmt = (
            update(Coupon)
            .where(Coupon.id == coupon_id)
            .where(or_(Coupon.usage_limit.is_(None), Coupon.usage_count < Coupon.usage_limit))
            .values(usage_count=Coupon.usage_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return bool(result.rowcount == 1)  # type: ignore[attr-defined]

    def delete(self, code: str) -> bool:
        """Delete a coupon by code."""
        coupon = self.get_by_code(code)
        if not coupon:
            return False

        self.db.delete(coupon)
        self.db.commit()
        return True
