"""OrderCharge schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.models.order_charge import ChargeApplyTo, OrderChargeType
from storefront.schemas.conditions import ChargeTier, OrderChargeConditions


class OrderChargeCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    type: OrderChargeType
    amount: Decimal | None = Field(default=None, ge=0)
    percentage: Decimal | None = Field(default=None, ge=0)
    tiers: list[ChargeTier] | None = None
    is_enabled: bool = True
    apply_to: ChargeApplyTo = ChargeApplyTo.ALL
    payment_methods: list[str] | None = None
    conditions: OrderChargeConditions | None = None
    priority: int = 0
    description: str | None = None
    display_label: str | None = Field(default=None, max_length=255)
    is_taxable: bool = False
    apply_after_discount: bool = True
    is_refundable: bool = False

    @model_validator(mode="after")
    def _check_type_fields(self) -> "OrderChargeCreate":
        if self.type == OrderChargeType.FIXED and self.amount is None:
            raise ValueError("Fixed charges require an amount")
        if self.type == OrderChargeType.PERCENTAGE and self.percentage is None:
            raise ValueError("Percentage charges require a percentage")
        if self.type == OrderChargeType.TIERED and not self.tiers:
            raise ValueError("Tiered charges require at least one tier")
        if self.apply_to == ChargeApplyTo.SPECIFIC_PAYMENT_METHODS and not self.payment_methods:
            raise ValueError("specific_payment_methods requires payment_methods")
        return self


class OrderChargeUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    amount: Decimal | None = Field(default=None, ge=0)
    percentage: Decimal | None = Field(default=None, ge=0)
    tiers: list[ChargeTier] | None = None
    is_enabled: bool | None = None
    apply_to: ChargeApplyTo | None = None
    payment_methods: list[str] | None = None
    conditions: OrderChargeConditions | None = None
    priority: int | None = None
    description: str | None = None
    display_label: str | None = Field(default=None, max_length=255)
    is_taxable: bool | None = None
    apply_after_discount: bool | None = None
    is_refundable: bool | None = None


class OrderChargeRule(BaseModel):
    """Evaluation snapshot of an order charge row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    type: OrderChargeType
    amount: Decimal | None = None
    percentage: Decimal | None = None
    tiers: list[ChargeTier] | None = None
    is_enabled: bool
    apply_to: ChargeApplyTo
    payment_methods: list[str] | None = None
    conditions: OrderChargeConditions | None = None
    priority: int
    display_label: str | None = None
    is_taxable: bool
    apply_after_discount: bool
    is_refundable: bool


class OrderChargeResponse(OrderChargeRule):
    description: str | None = None
    created_at: datetime
    updated_at: datetime
