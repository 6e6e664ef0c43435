"""Schemas for order pricing quotes and the evaluator contexts they feed."""

from datetime import date, time
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from storefront.schemas.carrier import ShippingQuote
from storefront.schemas.delivery_option import DeliveryOptionQuote
from storefront.schemas.shipping_insurance import InsuranceQuote


class CartItem(BaseModel):
    product_id: int
    category_id: int | None = None
    brand: str | None = None
    price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class OrderContext(BaseModel):
    """Order facts consulted by the tax and order charge evaluators."""

    order_value: Decimal = Decimal("0")
    discounted_value: Decimal | None = None
    shipping_cost: Decimal = Decimal("0")
    payment_method: str | None = None
    pincode: str | None = None
    state: str | None = None
    categories: list[int] = Field(default_factory=list)

    @property
    def value_after_discount(self) -> Decimal:
        if self.discounted_value is None:
            return self.order_value
        return self.discounted_value


class ChargeLine(BaseModel):
    code: str
    name: str
    display_label: str | None = None
    type: str
    amount: Decimal
    is_taxable: bool


class AdvancePayment(BaseModel):
    type: str
    value: Decimal
    amount: Decimal
    description: str | None = None


class ChargesSummary(BaseModel):
    charges: list[ChargeLine] = Field(default_factory=list)
    total_charges: Decimal = Decimal("0")
    taxable_charges: Decimal = Decimal("0")
    non_taxable_charges: Decimal = Decimal("0")
    advance_payment: AdvancePayment | None = None


class TaxLine(BaseModel):
    code: str
    name: str
    display_label: str | None = None
    rate: Decimal
    amount: Decimal
    taxable_amount: Decimal
    is_inclusive: bool


class TaxSummary(BaseModel):
    taxes: list[TaxLine] = Field(default_factory=list)
    total_tax: Decimal = Decimal("0")
    inclusive_tax: Decimal = Decimal("0")
    exclusive_tax: Decimal = Decimal("0")


class TaxBreakdown(BaseModel):
    """Split of an amount into its net and tax parts."""

    base_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    rate: Decimal


class QuoteRequest(BaseModel):
    items: list[CartItem] = Field(min_length=1)
    customer_id: UUID | None = None
    customer_tier: str | None = None
    coupon_code: str | None = None
    payment_method: str = "online"
    zone: str | None = None
    weight: Decimal | None = Field(default=None, gt=0)
    pincode: str | None = None
    state: str | None = None
    is_oda: bool = False
    is_metro: bool = False
    is_remote: bool = False
    carrier_service_code: str | None = None
    delivery_option_code: str | None = None
    order_date: date | None = None
    order_time: time | None = None
    business_days_only: bool = False
    include_insurance: bool = False
    insurance_plan_id: UUID | None = None
    has_fragile_items: bool = False
    has_electronics: bool = False


class BundleDiscountLine(BaseModel):
    rule_id: UUID
    name: str
    amount: Decimal


class CouponDiscountLine(BaseModel):
    code: str
    type: str
    amount: Decimal
    free_shipping: bool = False
    is_stackable: bool = False


class QuoteResponse(BaseModel):
    currency: str
    subtotal: Decimal
    bundle_discount: BundleDiscountLine | None = None
    coupon: CouponDiscountLine | None = None
    discount_total: Decimal
    discounted_subtotal: Decimal
    shipping_quote: ShippingQuote | None = None
    delivery_option: DeliveryOptionQuote | None = None
    shipping_charge: Decimal
    insurance: InsuranceQuote | None = None
    insurance_premium: Decimal
    charges: ChargesSummary
    taxes: TaxSummary
    total: Decimal
    stages: list[str] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)
