"""Order model: the slice of a placed order that pricing rules read."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, func

from storefront.core.database import Base
from storefront.models.shared import MONEY, UUIDType, generate_uuid


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    order_number = Column(String(50), unique=True, index=True, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    total = Column(MONEY, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
