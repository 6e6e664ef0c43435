"""Order pricing pipeline.

Pricing runs as an ordered list of named stages. Each stage is a pure
function from one ``PricingState`` to the next; all configuration is loaded
into a ``PricingConfig`` snapshot before the first stage runs, so stages
never touch the database. The stage order is declared once, in
``DEFAULT_STAGES``.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal

from storefront.models.coupon import CouponType
from storefront.schemas.bundle_discount_rule import BundleRule
from storefront.schemas.carrier import CarrierServiceRates, ShipmentOptions, ShippingQuote
from storefront.schemas.coupon import CouponDiscount, CouponRule
from storefront.schemas.delivery_option import (
    DeliveryContext,
    DeliveryOptionQuote,
    DeliveryOptionRule,
)
from storefront.schemas.order_charge import OrderChargeRule
from storefront.schemas.pricing import (
    BundleDiscountLine,
    ChargesSummary,
    CouponDiscountLine,
    OrderContext,
    QuoteRequest,
    QuoteResponse,
    TaxSummary,
)
from storefront.schemas.shipping_insurance import InsuranceContext, InsurancePlan, InsuranceQuote
from storefront.schemas.tax_configuration import TaxRule
from storefront.services.rules import (
    bundle_discount,
    carrier_rate,
    delivery_option,
    order_charge,
    shipping_insurance,
    tax,
)
from storefront.services.rules.money import ZERO, round_money

COD = "cod"


@dataclass(frozen=True)
class PricingConfig:
    """Every rule the stages may consult, captured before pricing starts."""

    tax_rules: tuple[TaxRule, ...] = ()
    charge_rules: tuple[OrderChargeRule, ...] = ()
    carrier_services: tuple[CarrierServiceRates, ...] = ()
    delivery_options: tuple[DeliveryOptionRule, ...] = ()
    insurance_plans: tuple[InsurancePlan, ...] = ()
    bundle_rules: tuple[BundleRule, ...] = ()
    currency: str = "INR"


@dataclass(frozen=True)
class CouponOutcome:
    """A coupon already checked against the customer, or why it was refused."""

    code: str
    coupon: CouponRule | None = None
    discount: CouponDiscount | None = None
    error: str | None = None


@dataclass(frozen=True)
class PricingState:
    request: QuoteRequest
    config: PricingConfig
    now: datetime
    order_date: date
    customer_tier: str | None = None
    coupon_outcome: CouponOutcome | None = None

    subtotal: Decimal = ZERO
    bundle_rule: BundleRule | None = None
    bundle_discount: Decimal = ZERO
    coupon_discount: Decimal = ZERO
    free_shipping: bool = False
    discounted_subtotal: Decimal = ZERO
    shipping_quote: ShippingQuote | None = None
    base_shipping: Decimal = ZERO
    delivery_quote: DeliveryOptionQuote | None = None
    shipping_charge: Decimal = ZERO
    insurance: InsuranceQuote | None = None
    insurance_premium: Decimal = ZERO
    charges: ChargesSummary = field(default_factory=ChargesSummary)
    taxes: TaxSummary = field(default_factory=TaxSummary)
    total: Decimal = ZERO

    stages: tuple[str, ...] = ()
    messages: tuple[str, ...] = ()

    def with_message(self, message: str) -> "PricingState":
        return replace(self, messages=self.messages + (message,))

    @property
    def order_context(self) -> OrderContext:
        request = self.request
        return OrderContext(
            order_value=self.subtotal,
            discounted_value=self.discounted_subtotal,
            shipping_cost=self.shipping_charge,
            payment_method=request.payment_method,
            pincode=request.pincode,
            state=request.state,
            categories=sorted({i.category_id for i in request.items if i.category_id is not None}),
        )


StageFn = Callable[[PricingState], PricingState]


@dataclass(frozen=True)
class PricingStage:
    name: str
    fn: StageFn


def initial_state(
    request: QuoteRequest,
    config: PricingConfig,
    now: datetime,
    customer_tier: str | None = None,
    coupon_outcome: CouponOutcome | None = None,
) -> PricingState:
    subtotal = round_money(sum((item.line_total for item in request.items), ZERO))
    return PricingState(
        request=request,
        config=config,
        now=now,
        order_date=request.order_date or now.date(),
        customer_tier=customer_tier,
        coupon_outcome=coupon_outcome,
        subtotal=subtotal,
        discounted_subtotal=subtotal,
    )


def apply_bundle_discount(state: PricingState) -> PricingState:
    rule = bundle_discount.select_rule(
        state.config.bundle_rules, state.request.items, state.customer_tier, state.now
    )
    if rule is None:
        return state
    amount = bundle_discount.calculate_discount(rule, state.subtotal)
    return replace(
        state,
        bundle_rule=rule,
        bundle_discount=amount,
        discounted_subtotal=max(state.subtotal - amount, ZERO),
    )


def apply_coupon_discount(state: PricingState) -> PricingState:
    """Combine the coupon with any bundle discount.

    A stackable coupon applies on top of the bundle discount. Otherwise only
    the larger of the two is kept. Free shipping never competes with the
    bundle discount because it does not reduce the subtotal.
    """
    outcome = state.coupon_outcome
    if outcome is None:
        return state
    if outcome.coupon is None or outcome.discount is None:
        return state.with_message(outcome.error or f"Coupon '{outcome.code}' was not applied")

    coupon = outcome.coupon
    amount = outcome.discount.discount_amount
    free_shipping = outcome.discount.free_shipping
    bundle = state.bundle_discount

    if coupon.type != CouponType.FREE_SHIPPING and bundle > 0 and not coupon.is_stackable:
        if amount > bundle:
            state = replace(state, bundle_discount=ZERO).with_message(
                f"Coupon '{coupon.code}' replaces the bundle discount"
            )
            bundle = ZERO
        else:
            state = state.with_message(
                f"Bundle discount is larger than coupon '{coupon.code}'; coupon not applied"
            )
            amount = ZERO

    amount = min(amount, max(state.subtotal - bundle, ZERO))
    return replace(
        state,
        coupon_discount=amount,
        free_shipping=free_shipping,
        discounted_subtotal=max(state.subtotal - bundle - amount, ZERO),
    )


def apply_shipping(state: PricingState) -> PricingState:
    request = state.request
    if request.zone is None or request.weight is None:
        return state.with_message("Shipping not quoted: zone and weight are required")

    options = ShipmentOptions(
        is_oda=request.is_oda,
        is_cod=request.payment_method == COD,
        cod_amount=state.discounted_subtotal if request.payment_method == COD else ZERO,
    )
    quotes = carrier_rate.quote_rates(
        state.config.carrier_services, request.zone, request.weight, options, state.order_date
    )
    if request.carrier_service_code is not None:
        quotes = [q for q in quotes if q.carrier_service_code == request.carrier_service_code]
    if not quotes:
        return state.with_message(f"No carrier rate available for zone {request.zone}")

    quote = quotes[0]
    return replace(
        state,
        shipping_quote=quote,
        base_shipping=quote.total,
        shipping_charge=quote.total,
    )


def apply_delivery_option(state: PricingState) -> PricingState:
    request = state.request
    if request.delivery_option_code is not None and request.zone is not None:
        context = DeliveryContext(
            order_date=state.order_date,
            order_time=request.order_time,
            is_metro=request.is_metro,
            is_remote=request.is_remote,
            business_days_only=request.business_days_only,
        )
        quote = next(
            (
                q
                for q in delivery_option.available_options(
                    state.config.delivery_options,
                    request.zone,
                    state.discounted_subtotal,
                    state.base_shipping,
                    context,
                )
                if q.code == request.delivery_option_code
            ),
            None,
        )
        if quote is None:
            state = state.with_message(
                f"Delivery option '{request.delivery_option_code}' is not available"
            )
        else:
            state = replace(state, delivery_quote=quote, shipping_charge=quote.cost)

    if state.free_shipping and state.shipping_charge > 0:
        state = replace(state, shipping_charge=ZERO).with_message("Free shipping applied")
    return state


def apply_insurance(state: PricingState) -> PricingState:
    request = state.request
    context = InsuranceContext(
        zone=request.zone,
        is_remote=request.is_remote,
        has_fragile_items=request.has_fragile_items,
        has_electronics=request.has_electronics,
    )
    plans = state.config.insurance_plans
    order_value = state.subtotal

    quote: InsuranceQuote | None = None
    mandatory = shipping_insurance.mandatory_plan(plans, order_value, context)
    if mandatory is not None:
        quote = shipping_insurance.calculate_premium(mandatory, order_value, context)
    elif request.insurance_plan_id is not None:
        plan = next((p for p in plans if p.id == request.insurance_plan_id and p.is_active), None)
        if plan is None:
            return state.with_message("Requested insurance plan is not available")
        quote = shipping_insurance.calculate_premium(plan, order_value, context)
    elif request.include_insurance:
        options = shipping_insurance.available_plans(plans, order_value, context)
        quote = options[0] if options else None

    if quote is None:
        return state
    if not quote.eligible:
        return state.with_message(quote.reason or "Order is not eligible for insurance")
    return replace(state, insurance=quote, insurance_premium=quote.premium)


def apply_order_charges(state: PricingState) -> PricingState:
    charges = order_charge.calculate_charges(state.config.charge_rules, state.order_context)
    return replace(state, charges=charges)


def apply_tax(state: PricingState) -> PricingState:
    taxes = tax.calculate_taxes(state.config.tax_rules, state.order_context, state.charges)
    return replace(state, taxes=taxes)


def apply_total(state: PricingState) -> PricingState:
    """Sum the stages. Inclusive tax is already inside the prices."""
    total = (
        state.discounted_subtotal
        + state.shipping_charge
        + state.insurance_premium
        + state.charges.total_charges
        + state.taxes.exclusive_tax
    )
    total = max(round_money(total), ZERO)

    charges = state.charges
    if charges.advance_payment is not None:
        advance = order_charge.with_order_total(charges.advance_payment, total)
        charges = charges.model_copy(update={"advance_payment": advance})
    return replace(state, total=total, charges=charges)


DEFAULT_STAGES: tuple[PricingStage, ...] = (
    PricingStage("bundle_discount", apply_bundle_discount),
    PricingStage("coupon_discount", apply_coupon_discount),
    PricingStage("shipping", apply_shipping),
    PricingStage("delivery_option", apply_delivery_option),
    PricingStage("insurance", apply_insurance),
    PricingStage("order_charges", apply_order_charges),
    PricingStage("tax", apply_tax),
    PricingStage("total", apply_total),
)


def run_pipeline(
    state: PricingState,
    stages: Sequence[PricingStage] = DEFAULT_STAGES,
) -> PricingState:
    for stage in stages:
        state = stage.fn(state)
        state = replace(state, stages=state.stages + (stage.name,))
    return state


def to_response(state: PricingState) -> QuoteResponse:
    bundle_line = None
    if state.bundle_rule is not None and state.bundle_discount > 0:
        bundle_line = BundleDiscountLine(
            rule_id=state.bundle_rule.id,
            name=state.bundle_rule.name,
            amount=state.bundle_discount,
        )

    coupon_line = None
    outcome = state.coupon_outcome
    if outcome is not None and outcome.coupon is not None:
        coupon_line = CouponDiscountLine(
            code=outcome.coupon.code,
            type=outcome.coupon.type.value,
            amount=state.coupon_discount,
            free_shipping=state.free_shipping,
            is_stackable=outcome.coupon.is_stackable,
        )

    return QuoteResponse(
        currency=state.config.currency,
        subtotal=state.subtotal,
        bundle_discount=bundle_line,
        coupon=coupon_line,
        discount_total=state.bundle_discount + state.coupon_discount,
        discounted_subtotal=state.discounted_subtotal,
        shipping_quote=state.shipping_quote,
        delivery_option=state.delivery_quote,
        shipping_charge=state.shipping_charge,
        insurance=state.insurance,
        insurance_premium=state.insurance_premium,
        charges=state.charges,
        taxes=state.taxes,
        total=state.total,
        stages=list(state.stages),
        messages=list(state.messages),
    )
