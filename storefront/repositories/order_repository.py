"""Order repository for data access."""

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.order import Order, OrderStatus
from storefront.schemas.customer import OrderCreate


class OrderRepository:
    """Repository for Order model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: UUID) -> Order | None:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_order_number(self, order_number: str) -> Order | None:
        return self.db.query(Order).filter(Order.order_number == order_number).first()

    def get_by_customer_id(self, customer_id: UUID) -> list[Order]:
        return (
            self.db.query(Order)
            .filter(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def count_non_cancelled(self, customer_id: UUID, exclude_order_id: UUID | None = None) -> int:
        """Count a customer's orders that were not cancelled."""
        query = self.db.query(func.count(Order.id)).filter(
            Order.customer_id == customer_id,
            Order.status != OrderStatus.CANCELLED.value,
        )
        if exclude_order_id is not None:
            query = query.filter(Order.id != exclude_order_id)
        return query.scalar() or 0

    def create(self, data: OrderCreate) -> Order:
        order = Order(
            customer_id=data.customer_id,
            order_number=data.order_number,
            status=data.status.value,
            total=data.total,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def update_status(self, order_id: UUID, status: OrderStatus) -> Order | None:
        order = self.get_by_id(order_id)
        if not order:
            return None

        order.status = status.value  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(order)
        return order
