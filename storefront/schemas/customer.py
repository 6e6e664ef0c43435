"""Customer, CustomerGroup and Order schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.order import OrderStatus


class CustomerGroupCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)


class CustomerGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    created_at: datetime


class CustomerCreate(BaseModel):
    external_id: str = Field(max_length=255)
    name: str = Field(max_length=255)
    email: str | None = Field(default=None, max_length=255)
    tier: str | None = Field(default=None, max_length=50)
    group_codes: list[str] = Field(default_factory=list)


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    external_id: str
    name: str
    email: str | None = None
    tier: str | None = None
    groups: list[CustomerGroupResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class OrderCreate(BaseModel):
    customer_id: UUID
    order_number: str = Field(max_length=50)
    status: OrderStatus = OrderStatus.PENDING
    total: Decimal = Field(default=Decimal("0"), ge=0)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    order_number: str
    status: str
    total: Decimal
    created_at: datetime
    updated_at: datetime
