"""Customer and CustomerGroup repositories for data access."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.core.sorting import apply_order_by
from storefront.models.customer import Customer, CustomerGroup
from storefront.schemas.customer import CustomerCreate, CustomerGroupCreate


class CustomerGroupRepository:
    """Repository for CustomerGroup model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[CustomerGroup]:
        return self.db.query(CustomerGroup).order_by(CustomerGroup.code.asc()).all()

    def get_by_code(self, code: str) -> CustomerGroup | None:
        return self.db.query(CustomerGroup).filter(CustomerGroup.code == code).first()

    def get_by_codes(self, codes: list[str]) -> list[CustomerGroup]:
        if not codes:
            return []
        return self.db.query(CustomerGroup).filter(CustomerGroup.code.in_(codes)).all()

    def create(self, data: CustomerGroupCreate) -> CustomerGroup:
        group = CustomerGroup(code=data.code, name=data.name)
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)
        return group


class CustomerRepository:
    """Repository for Customer model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
    ) -> list[Customer]:
        """Get all customers with pagination."""
        query = self.db.query(Customer)
        query = apply_order_by(query, Customer, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(Customer.id)).scalar() or 0

    def get_by_id(self, customer_id: UUID) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_by_external_id(self, external_id: str) -> Customer | None:
        return self.db.query(Customer).filter(Customer.external_id == external_id).first()

    def create(self, data: CustomerCreate, groups: list[CustomerGroup] | None = None) -> Customer:
        """Create a new customer, optionally as a member of the given groups."""
        customer = Customer(
            external_id=data.external_id,
            name=data.name,
            email=data.email,
            tier=data.tier,
        )
        customer.groups = list(groups or [])
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer
