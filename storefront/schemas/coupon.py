"""Coupon and CouponUsage schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.models.coupon import CouponType
from storefront.schemas.conditions import BuyXGetYConfig, DayTimeRestrictions
from storefront.schemas.pricing import CartItem
from storefront.schemas.shared import UTCDatetime, as_utc

COUPON_TERM_FIELDS = {"type", "value", "starts_at", "expires_at", "buy_x_get_y_config"}


def check_coupon_terms(values: dict[str, Any]) -> None:
    """Raise ValueError when a coupon's type, value and validity window disagree."""
    expires_at = values["expires_at"]
    if expires_at is not None and as_utc(expires_at) <= as_utc(values["starts_at"]):
        raise ValueError("expires_at must be after starts_at")
    value = values["value"]
    if values["type"] == CouponType.PERCENTAGE and value is not None and value > 100:
        raise ValueError("Percentage coupons cannot exceed 100")
    if values["type"] == CouponType.BUY_X_GET_Y and values["buy_x_get_y_config"] is None:
        raise ValueError("buy_x_get_y coupons require buy_x_get_y_config")


class CouponCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    description: str | None = None
    type: CouponType
    value: Decimal = Field(default=Decimal("0"), ge=0)
    minimum_order_amount: Decimal | None = Field(default=None, ge=0)
    maximum_discount_amount: Decimal | None = Field(default=None, ge=0)
    usage_limit: int | None = Field(default=None, ge=1)
    usage_limit_per_customer: int | None = Field(default=None, ge=1)
    starts_at: datetime
    expires_at: datetime | None = None
    is_active: bool = True
    is_stackable: bool = False
    applicable_products: list[int] | None = None
    applicable_categories: list[int] | None = None
    applicable_customer_groups: list[str] | None = None
    excluded_products: list[int] | None = None
    excluded_categories: list[int] | None = None
    first_order_only: bool = False
    buy_x_get_y_config: BuyXGetYConfig | None = None
    day_time_restrictions: DayTimeRestrictions | None = None

    @model_validator(mode="after")
    def _check_coupon(self) -> "CouponCreate":
        check_coupon_terms(self.model_dump(include=COUPON_TERM_FIELDS))
        return self


class CouponUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    value: Decimal | None = Field(default=None, ge=0)
    minimum_order_amount: Decimal | None = Field(default=None, ge=0)
    maximum_discount_amount: Decimal | None = Field(default=None, ge=0)
    usage_limit: int | None = Field(default=None, ge=1)
    usage_limit_per_customer: int | None = Field(default=None, ge=1)
    expires_at: datetime | None = None
    is_active: bool | None = None
    is_stackable: bool | None = None
    applicable_products: list[int] | None = None
    applicable_categories: list[int] | None = None
    applicable_customer_groups: list[str] | None = None
    excluded_products: list[int] | None = None
    excluded_categories: list[int] | None = None
    first_order_only: bool | None = None
    buy_x_get_y_config: BuyXGetYConfig | None = None
    day_time_restrictions: DayTimeRestrictions | None = None


class CouponRule(BaseModel):
    """Evaluation snapshot of a coupon row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    description: str | None = None
    type: CouponType
    value: Decimal
    minimum_order_amount: Decimal | None = None
    maximum_discount_amount: Decimal | None = None
    usage_limit: int | None = None
    usage_limit_per_customer: int | None = None
    usage_count: int
    starts_at: UTCDatetime
    expires_at: UTCDatetime | None = None
    is_active: bool
    is_stackable: bool
    applicable_products: list[int] | None = None
    applicable_categories: list[int] | None = None
    applicable_customer_groups: list[str] | None = None
    excluded_products: list[int] | None = None
    excluded_categories: list[int] | None = None
    first_order_only: bool
    buy_x_get_y_config: BuyXGetYConfig | None = None
    day_time_restrictions: DayTimeRestrictions | None = None


class CouponResponse(CouponRule):
    formatted_value: str | None = None
    remaining_uses: int | None = None
    created_at: datetime
    updated_at: datetime


class CouponDiscount(BaseModel):
    """Result of a coupon discount calculation."""

    discount_amount: Decimal = Decimal("0")
    free_shipping: bool = False
    applicable_items: list[CartItem] = Field(default_factory=list)
    coupon_type: CouponType


class CouponValidateRequest(BaseModel):
    coupon_code: str
    customer_id: UUID | None = None
    order_total: Decimal = Field(ge=0)
    items: list[CartItem] = Field(default_factory=list)


class CouponValidateResponse(BaseModel):
    valid: bool
    coupon_code: str
    messages: list[str] = Field(default_factory=list)
    discount: CouponDiscount | None = None


class CouponRedeemRequest(BaseModel):
    coupon_code: str
    customer_id: UUID
    order_id: UUID
    order_total: Decimal = Field(ge=0)
    items: list[CartItem] = Field(default_factory=list)
    usage_context: dict[str, Any] | None = None


class CouponUsageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    coupon_id: UUID
    customer_id: UUID
    order_id: UUID
    discount_amount: Decimal
    order_total_before_discount: Decimal
    order_total_after_discount: Decimal
    applied_products: list[int] | None = None
    usage_context: dict[str, Any] | None = None
    created_at: datetime


class CouponAnalyticsResponse(BaseModel):
    """Analytics data for a coupon."""

    usage_count: int
    usage_limit: int | None = None
    remaining_uses: int | None = None
    usage_percentage: Decimal
    total_discount_given: Decimal
    average_discount: Decimal
