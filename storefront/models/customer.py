from sqlalchemy import Column, DateTime, ForeignKey, String, Table, func
from sqlalchemy.orm import relationship

from storefront.core.database import Base
from storefront.models.shared import UUIDType, generate_uuid

customer_group_members = Table(
    "customer_group_members",
    Base.metadata,
    Column(
        "customer_id",
        UUIDType,
        ForeignKey("customers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "customer_group_id",
        UUIDType,
        ForeignKey("customer_groups.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class CustomerGroup(Base):
    __tablename__ = "customer_groups"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Customer(Base):
    __tablename__ = "customers"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    external_id = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    tier = Column(String(50), nullable=True)

    groups = relationship("CustomerGroup", secondary=customer_group_members, lazy="selectin")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
