"""DeliveryOption repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.delivery_option import DeliveryOption
from storefront.schemas.delivery_option import DeliveryOptionCreate, DeliveryOptionUpdate
from storefront.schemas.shared import to_column_values

JSON_FIELDS = {
    "availability_zones",
    "availability_conditions",
    "restricted_days",
    "cutoff_time",
}


class DeliveryOptionRepository:
    """Repository for DeliveryOption model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[DeliveryOption]:
        """Get all delivery options, by display order unless asked otherwise."""
        query = self.db.query(DeliveryOption)
        query = apply_order_by(
            query, DeliveryOption, order_by, default_field="sort_order", default_direction="asc"
        )
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(DeliveryOption.id)).scalar() or 0

    def get_active(self) -> list[DeliveryOption]:
        """Get active delivery options ordered by sort_order then name."""
        return (
            self.db.query(DeliveryOption)
            .filter(DeliveryOption.is_active.is_(True))
            .order_by(DeliveryOption.sort_order.asc(), DeliveryOption.name.asc())
            .all()
        )

    def get_by_id(self, option_id: UUID) -> DeliveryOption | None:
        return self.db.query(DeliveryOption).filter(DeliveryOption.id == option_id).first()

    def get_by_code(self, code: str) -> DeliveryOption | None:
        return self.db.query(DeliveryOption).filter(DeliveryOption.code == code).first()

    def create(self, data: DeliveryOptionCreate) -> DeliveryOption:
        """Create a new delivery option."""
        option = DeliveryOption(**to_column_values(data, JSON_FIELDS))
        self.db.add(option)
        self.db.commit()
        self.db.refresh(option)
        return option

    def update(self, code: str, data: DeliveryOptionUpdate) -> DeliveryOption | None:
        """Update a delivery option by code."""
        option = self.get_by_code(code)
        if not option:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(option, key, value)

        self.db.commit()
        self.db.refresh(option)
        return option

    def delete(self, code: str) -> bool:
        """Delete a delivery option by code."""
        option = self.get_by_code(code)
        if not option:
            return False

        self.db.delete(option)
        self.db.commit()
        return True
