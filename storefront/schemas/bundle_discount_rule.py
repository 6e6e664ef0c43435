"""BundleDiscountRule schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.models.bundle_discount_rule import BundleDiscountType
from storefront.schemas.conditions import BundleConditions
from storefront.schemas.shared import UTCDatetime


class BundleDiscountRuleCreate(BaseModel):
    name: str = Field(max_length=255)
    description: str | None = None
    min_products: int = Field(default=2, ge=1)
    max_products: int | None = Field(default=None, ge=1)
    discount_type: BundleDiscountType = BundleDiscountType.PERCENTAGE
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    fixed_discount: Decimal = Field(default=Decimal("0"), ge=0)
    category_id: int | None = None
    customer_tier: str | None = Field(default=None, max_length=50)
    is_active: bool = True
    priority: int = 0
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    conditions: BundleConditions | None = None

    @model_validator(mode="after")
    def _check_ranges(self) -> "BundleDiscountRuleCreate":
        if self.max_products is not None and self.min_products > self.max_products:
            raise ValueError("min_products must not exceed max_products")
        if self.valid_from and self.valid_until and self.valid_until < self.valid_from:
            raise ValueError("valid_until must not be before valid_from")
        return self


class BundleDiscountRuleUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    min_products: int | None = Field(default=None, ge=1)
    max_products: int | None = Field(default=None, ge=1)
    discount_type: BundleDiscountType | None = None
    discount_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    fixed_discount: Decimal | None = Field(default=None, ge=0)
    category_id: int | None = None
    customer_tier: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None
    priority: int | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    conditions: BundleConditions | None = None


class BundleRule(BaseModel):
    """Evaluation snapshot of a bundle discount rule row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    min_products: int
    max_products: int | None = None
    discount_type: BundleDiscountType
    discount_percentage: Decimal
    fixed_discount: Decimal
    category_id: int | None = None
    customer_tier: str | None = None
    is_active: bool
    priority: int
    valid_from: UTCDatetime | None = None
    valid_until: UTCDatetime | None = None
    conditions: BundleConditions | None = None


class BundleDiscountRuleResponse(BundleRule):
    created_at: datetime
    updated_at: datetime
