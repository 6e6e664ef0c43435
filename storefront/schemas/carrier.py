"""CarrierService and CarrierRateCard schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.models.carrier_service import ServiceTier


class CarrierServiceCreate(BaseModel):
    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    carrier_name: str = Field(max_length=255)
    service_tier: ServiceTier = ServiceTier.SURFACE
    is_active: bool = True


class CarrierServiceUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    carrier_name: str | None = Field(default=None, max_length=255)
    service_tier: ServiceTier | None = None
    is_active: bool | None = None


class CarrierServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    carrier_name: str
    service_tier: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


def check_effective_window(effective_from: date, effective_to: date | None) -> None:
    if effective_to is not None and effective_to < effective_from:
        raise ValueError("effective_to must not be before effective_from")


class CarrierRateCardCreate(BaseModel):
    zone_code: str = Field(max_length=20)
    weight_min: Decimal = Field(default=Decimal("0"), ge=0)
    weight_max: Decimal | None = Field(default=None, gt=0)
    base_rate: Decimal = Field(default=Decimal("0"), ge=0)
    additional_per_kg: Decimal = Field(default=Decimal("0"), ge=0)
    additional_per_500g: Decimal = Field(default=Decimal("0"), ge=0)
    fuel_surcharge_percent: Decimal = Field(default=Decimal("0"), ge=0)
    gst_percent: Decimal = Field(default=Decimal("0"), ge=0)
    handling_charge: Decimal = Field(default=Decimal("0"), ge=0)
    oda_charge: Decimal = Field(default=Decimal("0"), ge=0)
    cod_charge_fixed: Decimal = Field(default=Decimal("0"), ge=0)
    cod_charge_percent: Decimal = Field(default=Decimal("0"), ge=0)
    min_cod_charge: Decimal = Field(default=Decimal("0"), ge=0)
    insurance_percent: Decimal = Field(default=Decimal("0"), ge=0)
    min_insurance_charge: Decimal = Field(default=Decimal("0"), ge=0)
    rto_charge: Decimal = Field(default=Decimal("0"), ge=0)
    rto_percent: Decimal = Field(default=Decimal("0"), ge=0)
    effective_from: date
    effective_to: date | None = None
    is_active: bool = True

    @model_validator(mode="after")
    def _check_ranges(self) -> "CarrierRateCardCreate":
        if self.weight_max is not None and self.weight_min > self.weight_max:
            raise ValueError("weight_min must not exceed weight_max")
        check_effective_window(self.effective_from, self.effective_to)
        return self


class CarrierRateCardUpdate(BaseModel):
    base_rate: Decimal | None = Field(default=None, ge=0)
    additional_per_kg: Decimal | None = Field(default=None, ge=0)
    additional_per_500g: Decimal | None = Field(default=None, ge=0)
    fuel_surcharge_percent: Decimal | None = Field(default=None, ge=0)
    gst_percent: Decimal | None = Field(default=None, ge=0)
    handling_charge: Decimal | None = Field(default=None, ge=0)
    oda_charge: Decimal | None = Field(default=None, ge=0)
    cod_charge_fixed: Decimal | None = Field(default=None, ge=0)
    cod_charge_percent: Decimal | None = Field(default=None, ge=0)
    min_cod_charge: Decimal | None = Field(default=None, ge=0)
    insurance_percent: Decimal | None = Field(default=None, ge=0)
    min_insurance_charge: Decimal | None = Field(default=None, ge=0)
    effective_to: date | None = None
    is_active: bool | None = None


class RateCard(BaseModel):
    """Evaluation snapshot of a carrier rate card row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    carrier_service_id: UUID
    zone_code: str
    weight_min: Decimal
    weight_max: Decimal | None = None
    base_rate: Decimal
    additional_per_kg: Decimal
    additional_per_500g: Decimal
    fuel_surcharge_percent: Decimal
    gst_percent: Decimal
    handling_charge: Decimal
    oda_charge: Decimal
    cod_charge_fixed: Decimal
    cod_charge_percent: Decimal
    min_cod_charge: Decimal
    insurance_percent: Decimal
    min_insurance_charge: Decimal
    rto_charge: Decimal
    rto_percent: Decimal
    effective_from: date
    effective_to: date | None = None
    is_active: bool


class CarrierRateCardResponse(RateCard):
    created_at: datetime
    updated_at: datetime


class CarrierServiceRates(BaseModel):
    """A carrier service together with all of its rate cards."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    carrier_name: str
    service_tier: str
    is_active: bool
    rate_cards: list[RateCard] = Field(default_factory=list)


class ShipmentOptions(BaseModel):
    is_oda: bool = False
    is_cod: bool = False
    cod_amount: Decimal = Decimal("0")
    insurance_value: Decimal = Decimal("0")


class RateBreakdown(BaseModel):
    base: Decimal
    fuel_surcharge: Decimal = Decimal("0")
    handling: Decimal = Decimal("0")
    oda: Decimal = Decimal("0")
    cod: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    subtotal: Decimal
    gst: Decimal = Decimal("0")
    total: Decimal


class ShippingQuote(BaseModel):
    carrier_service_id: UUID
    carrier_service_code: str
    carrier_name: str
    service_name: str
    service_tier: str
    rate_card_id: UUID
    zone_code: str
    weight: Decimal
    breakdown: RateBreakdown

    @property
    def total(self) -> Decimal:
        return self.breakdown.total


class ShippingRateRequest(BaseModel):
    zone: str
    weight: Decimal = Field(gt=0)
    carrier_service_code: str | None = None
    ship_date: date | None = None
    options: ShipmentOptions = Field(default_factory=ShipmentOptions)
