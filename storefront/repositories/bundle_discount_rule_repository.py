"""BundleDiscountRule repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.bundle_discount_rule import BundleDiscountRule
from storefront.schemas.bundle_discount_rule import (
    BundleDiscountRuleCreate,
    BundleDiscountRuleUpdate,
)
from storefront.schemas.shared import to_column_values

JSON_FIELDS = {"conditions"}


class BundleDiscountRuleRepository:
    """Repository for BundleDiscountRule model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[BundleDiscountRule]:
        query = self.db.query(BundleDiscountRule)
        query = apply_order_by(query, BundleDiscountRule, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(BundleDiscountRule.id)).scalar() or 0

    def get_active(self) -> list[BundleDiscountRule]:
        """Get active rules, highest priority then highest percentage first.

        Validity windows are not filtered here; the cached snapshot outlives a
        single request, so the window is checked at evaluation time.
        """
        return (
            self.db.query(BundleDiscountRule)
            .filter(BundleDiscountRule.is_active.is_(True))
            .order_by(
                BundleDiscountRule.priority.desc(),
                BundleDiscountRule.discount_percentage.desc(),
            )
            .all()
        )

    def get_by_id(self, rule_id: UUID) -> BundleDiscountRule | None:
        return self.db.query(BundleDiscountRule).filter(BundleDiscountRule.id == rule_id).first()

    def create(self, data: BundleDiscountRuleCreate) -> BundleDiscountRule:
        """Create a new bundle discount rule."""
        rule = BundleDiscountRule(**to_column_values(data, JSON_FIELDS))
        self.db.add(rule)
        self.db.commit()
        self.db.refresh(rule)
        return rule

    def update(self, rule_id: UUID, data: BundleDiscountRuleUpdate) -> BundleDiscountRule | None:
        rule = self.get_by_id(rule_id)
        if not rule:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(rule, key, value)

        self.db.commit()
        self.db.refresh(rule)
        return rule

    def delete(self, rule_id: UUID) -> bool:
        rule = self.get_by_id(rule_id)
        if not rule:
            return False

        self.db.delete(rule)
        self.db.commit()
        return True
