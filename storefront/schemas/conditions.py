"""Typed condition payloads stored in the JSON columns of pricing rules.

Each rule kind gets its own model; list-shaped conditions are discriminated
unions on the ``type`` tag so an unknown tag is rejected when the rule is
written, not silently skipped when an order is priced.
"""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Condition(BaseModel):
    model_config = ConfigDict(extra="forbid")


# --- Tax rules -----------------------------------------------------------


class TaxConditions(_Condition):
    state_based: bool = False
    states: list[str] = Field(default_factory=list)
    product_categories: list[int] = Field(default_factory=list)
    min_order_value: Decimal | None = None


# --- Order charges -------------------------------------------------------


class AdvancePaymentConfig(_Condition):
    required: bool = False
    type: Literal["percentage", "fixed"] = "percentage"
    value: Decimal = Decimal("0")
    description: str | None = None


class OrderChargeConditions(_Condition):
    min_order_value: Decimal | None = None
    max_order_value: Decimal | None = None
    exempt_above_value: Decimal | None = None
    excluded_categories: list[int] = Field(default_factory=list)
    excluded_pincodes: list[str] = Field(default_factory=list)
    included_states: list[str] = Field(default_factory=list)
    advance_payment: AdvancePaymentConfig | None = None


class ChargeTier(_Condition):
    """One bracket of a tiered charge.

    ``charge`` is either a flat amount ("50") or a percentage of the order
    value ("5%"). It is kept as a string so both forms survive a JSON round
    trip unchanged.
    """

    min: Decimal = Decimal("0")
    max: Decimal | None = None
    charge: str

    @field_validator("charge", mode="before")
    @classmethod
    def _normalize_charge(cls, value: object) -> str:
        if isinstance(value, bool):
            raise ValueError("charge must be a number or a percentage string")
        if isinstance(value, int | float | Decimal):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError("charge must be a number or a percentage string")
        text = value.strip()
        number = text[:-1] if text.endswith("%") else text
        try:
            amount = Decimal(number)
        except ArithmeticError:
            raise ValueError(f"Invalid tier charge: {value!r}") from None
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"Tier charge must be a finite, non-negative number: {value!r}")
        return text

    @property
    def is_percentage(self) -> bool:
        return self.charge.endswith("%")

    @property
    def charge_value(self) -> Decimal:
        return Decimal(self.charge.rstrip("%"))


# --- Delivery options ----------------------------------------------------


class MetroOnlyCondition(_Condition):
    type: Literal["metro_only"] = "metro_only"


class ExcludeRemoteCondition(_Condition):
    type: Literal["exclude_remote"] = "exclude_remote"


class WeekdayOnlyCondition(_Condition):
    type: Literal["weekday_only"] = "weekday_only"


class HighValueOnlyCondition(_Condition):
    type: Literal["high_value_only"] = "high_value_only"
    threshold: Decimal = Decimal("5000")


class HighValueDiscountCondition(_Condition):
    type: Literal["high_value_discount"] = "high_value_discount"
    threshold: Decimal = Decimal("10000")
    discount_percent: Decimal = Decimal("10")


class WeekendSurchargeCondition(_Condition):
    type: Literal["weekend_surcharge"] = "weekend_surcharge"
    amount: Decimal = Decimal("50")


class DeliveryRemoteSurchargeCondition(_Condition):
    type: Literal["remote_surcharge"] = "remote_surcharge"
    amount: Decimal = Decimal("100")


DeliveryCondition = Annotated[
    MetroOnlyCondition
    | ExcludeRemoteCondition
    | WeekdayOnlyCondition
    | HighValueOnlyCondition
    | HighValueDiscountCondition
    | WeekendSurchargeCondition
    | DeliveryRemoteSurchargeCondition,
    Field(discriminator="type"),
]


# --- Shipping insurance --------------------------------------------------


class ZoneMultiplierCondition(_Condition):
    type: Literal["zone_multiplier"] = "zone_multiplier"
    zones: dict[str, Decimal] = Field(default_factory=dict)


class InsuranceRemoteSurchargeCondition(_Condition):
    type: Literal["remote_surcharge"] = "remote_surcharge"
    amount: Decimal = Decimal("0")


class FragileItemSurchargeCondition(_Condition):
    type: Literal["fragile_item_surcharge"] = "fragile_item_surcharge"
    multiplier: Decimal = Decimal("1.5")


class ElectronicsSurchargeCondition(_Condition):
    type: Literal["electronics_surcharge"] = "electronics_surcharge"
    multiplier: Decimal = Decimal("1.3")


class HighValueMandatoryCondition(_Condition):
    type: Literal["high_value_mandatory"] = "high_value_mandatory"
    threshold: Decimal = Decimal("5000")


class RemoteAreaMandatoryCondition(_Condition):
    type: Literal["remote_area_mandatory"] = "remote_area_mandatory"


class FragileMandatoryCondition(_Condition):
    type: Literal["fragile_mandatory"] = "fragile_mandatory"


InsuranceCondition = Annotated[
    ZoneMultiplierCondition
    | InsuranceRemoteSurchargeCondition
    | HighValueDiscountCondition
    | FragileItemSurchargeCondition
    | ElectronicsSurchargeCondition
    | HighValueMandatoryCondition
    | RemoteAreaMandatoryCondition
    | FragileMandatoryCondition,
    Field(discriminator="type"),
]


# --- Coupons -------------------------------------------------------------

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class BuyXGetYConfig(_Condition):
    buy_quantity: int = Field(default=1, ge=1)
    get_quantity: int = Field(default=1, ge=0)
    product_id: int | None = None


class HourWindow(_Condition):
    start: int = Field(default=0, ge=0, le=23)
    end: int = Field(default=23, ge=0, le=23)


class DayTimeRestrictions(_Condition):
    allowed_days: list[Weekday] = Field(default_factory=list)
    allowed_hours: HourWindow | None = None

    @field_validator("allowed_days", mode="before")
    @classmethod
    def _lowercase_days(cls, value: object) -> object:
        if isinstance(value, list):
            return [v.lower() if isinstance(v, str) else v for v in value]
        return value

    @model_validator(mode="after")
    def _check_hours(self) -> "DayTimeRestrictions":
        if self.allowed_hours and self.allowed_hours.start > self.allowed_hours.end:
            raise ValueError("allowed_hours.start must not be after allowed_hours.end")
        return self


# --- Bundle discounts ----------------------------------------------------


class BundleConditions(_Condition):
    brands: list[str] = Field(default_factory=list)
    min_total: Decimal | None = None
    product_ids: list[int] = Field(default_factory=list)
