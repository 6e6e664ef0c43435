"""ShippingInsurance schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.schemas.conditions import InsuranceCondition


class ShippingInsuranceCreate(BaseModel):
    name: str = Field(max_length=255)
    description: str | None = None
    min_order_value: Decimal = Field(default=Decimal("0"), ge=0)
    max_order_value: Decimal | None = Field(default=None, gt=0)
    coverage_percentage: Decimal = Field(default=Decimal("100"), ge=0, le=100)
    premium_percentage: Decimal = Field(default=Decimal("0"), ge=0)
    minimum_premium: Decimal = Field(default=Decimal("0"), ge=0)
    maximum_premium: Decimal | None = Field(default=None, ge=0)
    is_mandatory: bool = False
    conditions: list[InsuranceCondition] | None = None
    is_active: bool = True
    claim_processing_days: int = Field(default=7, ge=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ShippingInsuranceCreate":
        if self.max_order_value is not None and self.min_order_value > self.max_order_value:
            raise ValueError("min_order_value must not exceed max_order_value")
        if self.maximum_premium is not None and self.minimum_premium > self.maximum_premium:
            raise ValueError("minimum_premium must not exceed maximum_premium")
        return self


class ShippingInsuranceUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    min_order_value: Decimal | None = Field(default=None, ge=0)
    max_order_value: Decimal | None = Field(default=None, gt=0)
    coverage_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    premium_percentage: Decimal | None = Field(default=None, ge=0)
    minimum_premium: Decimal | None = Field(default=None, ge=0)
    maximum_premium: Decimal | None = Field(default=None, ge=0)
    is_mandatory: bool | None = None
    conditions: list[InsuranceCondition] | None = None
    is_active: bool | None = None
    claim_processing_days: int | None = Field(default=None, ge=0)


class InsurancePlan(BaseModel):
    """Evaluation snapshot of a shipping insurance row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    min_order_value: Decimal
    max_order_value: Decimal | None = None
    coverage_percentage: Decimal
    premium_percentage: Decimal
    minimum_premium: Decimal
    maximum_premium: Decimal | None = None
    is_mandatory: bool
    conditions: list[InsuranceCondition] | None = None
    is_active: bool
    claim_processing_days: int


class ShippingInsuranceResponse(InsurancePlan):
    created_at: datetime
    updated_at: datetime


class InsuranceContext(BaseModel):
    zone: str | None = None
    is_remote: bool = False
    has_fragile_items: bool = False
    has_electronics: bool = False


class InsuranceQuote(BaseModel):
    eligible: bool
    premium: Decimal = Decimal("0")
    coverage_amount: Decimal = Decimal("0")
    reason: str | None = None
    plan_id: UUID | None = None
    plan_name: str | None = None
    coverage_percentage: Decimal | None = None
    claim_processing_days: int | None = None
    is_mandatory: bool = False


class InsuranceOptionsRequest(BaseModel):
    order_value: Decimal = Field(ge=0)
    context: InsuranceContext = Field(default_factory=InsuranceContext)


class InsuranceOptionsResponse(BaseModel):
    is_mandatory: bool
    options: list[InsuranceQuote]
