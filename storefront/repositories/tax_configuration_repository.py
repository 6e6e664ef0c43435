"""TaxConfiguration repository for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.tax_configuration import TaxConfiguration
from storefront.schemas.shared import to_column_values
from storefront.schemas.tax_configuration import TaxConfigurationCreate, TaxConfigurationUpdate

JSON_FIELDS = {"conditions"}


class TaxConfigurationRepository:
    """Repository for TaxConfiguration model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[TaxConfiguration]:
        """Get all tax configurations with pagination."""
        query = self.db.query(TaxConfiguration)
        query = apply_order_by(query, TaxConfiguration, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(TaxConfiguration.id)).scalar() or 0

    def get_enabled(self) -> list[TaxConfiguration]:
        """Get enabled tax configurations, lowest priority value first."""
        return (
            self.db.query(TaxConfiguration)
            .filter(TaxConfiguration.is_enabled.is_(True))
            .order_by(TaxConfiguration.priority.asc(), TaxConfiguration.code.asc())
            .all()
        )

    def get_by_id(self, tax_id: UUID) -> TaxConfiguration | None:
        return self.db.query(TaxConfiguration).filter(TaxConfiguration.id == tax_id).first()

    def get_by_code(self, code: str) -> TaxConfiguration | None:
        return self.db.query(TaxConfiguration).filter(TaxConfiguration.code == code).first()

    def create(self, data: TaxConfigurationCreate) -> TaxConfiguration:
        """Create a new tax configuration."""
        tax = TaxConfiguration(**to_column_values(data, JSON_FIELDS))
        self.db.add(tax)
        self.db.commit()
        self.db.refresh(tax)
        return tax

    def update(self, code: str, data: TaxConfigurationUpdate) -> TaxConfiguration | None:
        """Update a tax configuration by code."""
        tax = self.get_by_code(code)
        if not tax:
            return None

        update_data = to_column_values(data, JSON_FIELDS, exclude_unset=True)
        for key, value in update_data.items():
            setattr(tax, key, value)

        self.db.commit()
        self.db.refresh(tax)
        return tax

    def delete(self, code: str) -> bool:
        """Delete a tax configuration by code."""
        tax = self.get_by_code(code)
        if not tax:
            return False

        self.db.delete(tax)
        self.db.commit()
        return True
