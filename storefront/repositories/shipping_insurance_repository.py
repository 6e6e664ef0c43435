"""ShippingInsurance repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.shipping_insurance import ShippingInsurance
from storefront.schemas.shared import to_column_values
from storefront.schemas.shipping_insurance import ShippingInsuranceCreate, ShippingInsuranceUpdate

JSON_FIELDS = {"conditions"}


class ShippingInsuranceRepository:
    """Repository for ShippingInsurance model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[ShippingInsurance]:
        query = self.db.query(ShippingInsurance)
        query = apply_order_by(query, ShippingInsurance, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(ShippingInsurance.id)).scalar() or 0

    def get_active(self) -> list[ShippingInsurance]:
        """Get active insurance plans, cheapest premium percentage first."""
        return (
            self.db.query(ShippingInsurance)
            .filter(ShippingInsurance.is_active.is_(True))
            .order_by(ShippingInsurance.premium_percentage.asc(), ShippingInsurance.name.asc())
            .all()
        )

    def get_by_id(self, plan_id: UUID) -> ShippingInsurance | None:
        return self.db.query(ShippingInsurance).filter(ShippingInsurance.id == plan_id).first()

    def create(self, data: ShippingInsuranceCreate) -> ShippingInsurance:
        """Create a new insurance plan."""
        plan = ShippingInsurance(**to_column_values(data, JSON_FIELDS))
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        return plan

    def update(self, plan_id: UUID, data: ShippingInsuranceUpdate) -> ShippingInsurance | None:
        """Update an insurance plan by ID."""
        plan = self.get_by_id(plan_id)
        if not plan:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(plan, key, value)

        self.db.commit()
        self.db.refresh(plan)
        return plan

    def delete(self, plan_id: UUID) -> bool:
        plan = self.get_by_id(plan_id)
        if not plan:
            return False

        self.db.delete(plan)
        self.db.commit()
        return True
