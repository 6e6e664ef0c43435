"""DeliveryOption schemas."""

from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.schemas.conditions import DeliveryCondition


class DeliveryOptionCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    description: str | None = None
    delivery_days_min: int = Field(default=1, ge=0)
    delivery_days_max: int = Field(default=1, ge=0)
    price_multiplier: Decimal = Field(default=Decimal("1"), ge=0)
    fixed_surcharge: Decimal = Field(default=Decimal("0"), ge=0)
    availability_zones: list[str] | None = None
    availability_conditions: list[DeliveryCondition] | None = None
    cutoff_time: time | None = None
    restricted_days: list[int] | None = None
    min_order_value: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True
    sort_order: int = 0

    @field_validator("restricted_days")
    @classmethod
    def _check_weekdays(cls, value: list[int] | None) -> list[int] | None:
        if value and any(day < 0 or day > 6 for day in value):
            raise ValueError("restricted_days must be weekday numbers 0 (Sunday) to 6 (Saturday)")
        return value

    @model_validator(mode="after")
    def _check_days(self) -> "DeliveryOptionCreate":
        if self.delivery_days_min > self.delivery_days_max:
            raise ValueError("delivery_days_min must not exceed delivery_days_max")
        return self


class DeliveryOptionUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    delivery_days_min: int | None = Field(default=None, ge=0)
    delivery_days_max: int | None = Field(default=None, ge=0)
    price_multiplier: Decimal | None = Field(default=None, ge=0)
    fixed_surcharge: Decimal | None = Field(default=None, ge=0)
    availability_zones: list[str] | None = None
    availability_conditions: list[DeliveryCondition] | None = None
    cutoff_time: time | None = None
    restricted_days: list[int] | None = None
    min_order_value: Decimal | None = Field(default=None, ge=0)
    is_active: bool | None = None
    sort_order: int | None = None


class DeliveryOptionRule(BaseModel):
    """Evaluation snapshot of a delivery option row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    description: str | None = None
    delivery_days_min: int
    delivery_days_max: int
    price_multiplier: Decimal
    fixed_surcharge: Decimal
    availability_zones: list[str] | None = None
    availability_conditions: list[DeliveryCondition] | None = None
    cutoff_time: str | None = None
    restricted_days: list[int] | None = None
    min_order_value: Decimal
    is_active: bool
    sort_order: int


class DeliveryOptionResponse(DeliveryOptionRule):
    created_at: datetime
    updated_at: datetime


class DeliveryContext(BaseModel):
    order_date: date = Field(default_factory=date.today)
    order_time: time | None = None
    is_metro: bool = False
    is_remote: bool = False
    business_days_only: bool = False


class DeliveryOptionQuote(BaseModel):
    option_id: UUID
    code: str
    name: str
    description: str | None = None
    cost: Decimal
    delivery_days_min: int
    delivery_days_max: int
    estimated_delivery_min: date
    estimated_delivery_max: date
    delivery_window: str


class DeliveryOptionsRequest(BaseModel):
    zone: str
    order_value: Decimal = Field(ge=0)
    base_shipping_cost: Decimal = Field(ge=0)
    context: DeliveryContext = Field(default_factory=DeliveryContext)
