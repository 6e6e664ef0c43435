"""OrderCharge repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.order_charge import OrderCharge
from storefront.schemas.order_charge import OrderChargeCreate, OrderChargeUpdate
from storefront.schemas.shared import to_column_values

JSON_FIELDS = {"tiers", "payment_methods", "conditions"}


class OrderChargeRepository:
    """Repository for OrderCharge model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[OrderCharge]:
        """Get all order charges with pagination."""
        query = self.db.query(OrderCharge)
        query = apply_order_by(query, OrderCharge, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(OrderCharge.id)).scalar() or 0

    def get_enabled(self) -> list[OrderCharge]:
        """Get enabled order charges, lowest priority value first."""
        return (
            self.db.query(OrderCharge)
            .filter(OrderCharge.is_enabled.is_(True))
            .order_by(OrderCharge.priority.asc(), OrderCharge.code.asc())
            .all()
        )

    def get_by_id(self, charge_id: UUID) -> OrderCharge | None:
        return self.db.query(OrderCharge).filter(OrderCharge.id == charge_id).first()

    def get_by_code(self, code: str) -> OrderCharge | None:
        return self.db.query(OrderCharge).filter(OrderCharge.code == code).first()

    def create(self, data: OrderChargeCreate) -> OrderCharge:
        """Create a new order charge."""
        charge = OrderCharge(**to_column_values(data, JSON_FIELDS))
        self.db.add(charge)
        self.db.commit()
        self.db.refresh(charge)
        return charge

    def update(self, code: str, data: OrderChargeUpdate) -> OrderCharge | None:
        """Update an order charge by code."""
        charge = self.get_by_code(code)
        if not charge:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(charge, key, value)

        self.db.commit()
        self.db.refresh(charge)
        return charge

    def delete(self, code: str) -> bool:
        """Delete an order charge by code."""
        charge = self.get_by_code(code)
        if not charge:
            return False

        self.db.delete(charge)
        self.db.commit()
        return True
