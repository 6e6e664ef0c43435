"""TaxConfiguration schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.models.tax_configuration import TaxApplyOn, TaxType
from storefront.schemas.conditions import TaxConditions


def check_inclusive_rate(is_inclusive: bool, rate: Decimal | None) -> None:
    # Extracting an inclusive tax divides by (1 + rate / 100)
    if is_inclusive and rate is not None and rate >= 100:
        raise ValueError("Inclusive tax rate must be below 100")


class TaxConfigurationCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    tax_type: TaxType = TaxType.GST
    rate: Decimal = Field(ge=0)
    is_enabled: bool = True
    is_inclusive: bool = False
    apply_on: TaxApplyOn = TaxApplyOn.SUBTOTAL
    conditions: TaxConditions | None = None
    priority: int = 0
    description: str | None = None
    display_label: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _check_inclusive_rate(self) -> "TaxConfigurationCreate":
        check_inclusive_rate(self.is_inclusive, self.rate)
        return self


class TaxConfigurationUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    tax_type: TaxType | None = None
    rate: Decimal | None = Field(default=None, ge=0)
    is_enabled: bool | None = None
    is_inclusive: bool | None = None
    apply_on: TaxApplyOn | None = None
    conditions: TaxConditions | None = None
    priority: int | None = None
    description: str | None = None
    display_label: str | None = Field(default=None, max_length=255)


class TaxRule(BaseModel):
    """Evaluation snapshot of a tax configuration row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    tax_type: str
    rate: Decimal
    is_enabled: bool
    is_inclusive: bool
    apply_on: TaxApplyOn
    conditions: TaxConditions | None = None
    priority: int
    display_label: str | None = None


class TaxConfigurationResponse(TaxRule):
    description: str | None = None
    created_at: datetime
    updated_at: datetime
