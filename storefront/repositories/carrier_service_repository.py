"""CarrierService repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from storefront.core.sorting import apply_order_by
from storefront.models.carrier_service import CarrierService
from storefront.schemas.carrier import CarrierServiceCreate, CarrierServiceUpdate
from storefront.schemas.shared import to_column_values


class CarrierServiceRepository:
    """Repository for CarrierService model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[CarrierService]:
        """Get all carrier services with pagination."""
        query = self.db.query(CarrierService)
        query = apply_order_by(query, CarrierService, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(CarrierService.id)).scalar() or 0

    def get_active_with_rate_cards(self) -> list[CarrierService]:
        """Get active carrier services with their rate cards eagerly loaded."""
        return (
            self.db.query(CarrierService)
            .options(selectinload(CarrierService.rate_cards))
            .filter(CarrierService.is_active.is_(True))
            .order_by(CarrierService.code.asc())
            .all()
        )

    def get_by_id(self, service_id: UUID) -> CarrierService | None:
        return self.db.query(CarrierService).filter(CarrierService.id == service_id).first()

    def get_by_code(self, code: str) -> CarrierService | None:
        return self.db.query(CarrierService).filter(CarrierService.code == code).first()

    def create(self, data: CarrierServiceCreate) -> CarrierService:
        """Create a new carrier service."""
        service = CarrierService(**to_column_values(data, set()))
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def update(self, code: str, data: CarrierServiceUpdate) -> CarrierService | None:
        """Update a carrier service by code."""
        service = self.get_by_code(code)
        if not service:
            return None

        update_data = to_column_values(data, set(), exclude_unset=True)
        for key, value in update_data.items():
            setattr(service, key, value)

        self.db.commit()
        self.db.refresh(service)
        return service

    def delete(self, code: str) -> bool:
        """Delete a carrier service and its rate cards."""
        service = self.get_by_code(code)
        if not service:
            return False

        self.db.delete(service)
        self.db.commit()
        return True
