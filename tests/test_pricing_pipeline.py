"""Tests for the staged order pricing pipeline."""

from dataclasses import replace
from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from storefront.models.bundle_discount_rule import BundleDiscountType
from storefront.models.coupon import CouponType
from storefront.models.order_charge import ChargeApplyTo, OrderChargeType
from storefront.models.tax_configuration import TaxApplyOn
from storefront.schemas.bundle_discount_rule import BundleRule
from storefront.schemas.carrier import CarrierServiceRates, RateCard
from storefront.schemas.conditions import AdvancePaymentConfig, OrderChargeConditions
from storefront.schemas.coupon import CouponDiscount, CouponRule
from storefront.schemas.delivery_option import DeliveryOptionRule
from storefront.schemas.order_charge import OrderChargeRule
from storefront.schemas.pricing import CartItem, QuoteRequest
from storefront.schemas.shipping_insurance import InsurancePlan
from storefront.schemas.tax_configuration import TaxRule
from storefront.services.pricing_pipeline import (
    DEFAULT_STAGES,
    CouponOutcome,
    PricingConfig,
    PricingStage,
    apply_bundle_discount,
    apply_coupon_discount,
    initial_state,
    run_pipeline,
    to_response,
)

NOW = datetime(2026, 10, 19, 6, 0, tzinfo=UTC)
ORDER_DATE = date(2026, 10, 19)

ZERO_RATES = {
    field: Decimal("0")
    for field in (
        "additional_per_kg",
        "additional_per_500g",
        "fuel_surcharge_percent",
        "gst_percent",
        "handling_charge",
        "oda_charge",
        "cod_charge_fixed",
        "cod_charge_percent",
        "min_cod_charge",
        "insurance_percent",
        "min_insurance_charge",
        "rto_charge",
        "rto_percent",
    )
}


def _carrier(code: str, base_rate: str, zone: str = "A") -> CarrierServiceRates:
    service_id = uuid4()
    card = RateCard(
        id=uuid4(),
        carrier_service_id=service_id,
        zone_code=zone,
        weight_min=Decimal("0"),
        base_rate=Decimal(base_rate),
        effective_from=date(2026, 1, 1),
        is_active=True,
        **ZERO_RATES,
    )
    return CarrierServiceRates(
        id=service_id,
        code=code,
        name=f"{code} Surface",
        carrier_name=code.title(),
        service_tier="surface",
        is_active=True,
        rate_cards=[card],
    )


def _bundle(percentage: str = "10") -> BundleRule:
    return BundleRule(
        id=uuid4(),
        name="Buy two save",
        min_products=2,
        discount_type=BundleDiscountType.PERCENTAGE,
        discount_percentage=Decimal(percentage),
        fixed_discount=Decimal("0"),
        is_active=True,
        priority=1,
    )


def _express() -> DeliveryOptionRule:
    return DeliveryOptionRule(
        id=uuid4(),
        code="express",
        name="Express",
        delivery_days_min=1,
        delivery_days_max=2,
        price_multiplier=Decimal("2"),
        fixed_surcharge=Decimal("0"),
        min_order_value=Decimal("0"),
        is_active=True,
        sort_order=1,
    )


def _charge(code: str = "HANDLING", **overrides) -> OrderChargeRule:
    values = {
        "id": uuid4(),
        "code": code,
        "name": code.title(),
        "type": OrderChargeType.FIXED,
        "amount": Decimal("20"),
        "is_enabled": True,
        "apply_to": ChargeApplyTo.ALL,
        "priority": 0,
        "is_taxable": True,
        "apply_after_discount": True,
        "is_refundable": False,
    }
    values.update(overrides)
    return OrderChargeRule(**values)


def _gst() -> TaxRule:
    return TaxRule(
        id=uuid4(),
        code="GST",
        name="GST",
        tax_type="gst",
        rate=Decimal("18"),
        is_enabled=True,
        is_inclusive=False,
        apply_on=TaxApplyOn.SUBTOTAL_WITH_ALL,
        priority=0,
    )


def _plan(name: str = "Cover", **overrides) -> InsurancePlan:
    values = {
        "id": uuid4(),
        "name": name,
        "min_order_value": Decimal("0"),
        "coverage_percentage": Decimal("100"),
        "premium_percentage": Decimal("1"),
        "minimum_premium": Decimal("0"),
        "is_mandatory": False,
        "is_active": True,
        "claim_processing_days": 7,
    }
    values.update(overrides)
    return InsurancePlan(**values)


def _coupon_outcome(
    coupon_type: CouponType,
    amount: str,
    is_stackable: bool = False,
    code: str = "PROMO",
) -> CouponOutcome:
    coupon = CouponRule(
        id=uuid4(),
        code=code,
        name=code,
        type=coupon_type,
        value=Decimal(amount),
        usage_count=0,
        starts_at=datetime(2026, 1, 1, tzinfo=UTC),
        is_active=True,
        is_stackable=is_stackable,
        first_order_only=False,
    )
    discount = CouponDiscount(
        discount_amount=Decimal(amount),
        free_shipping=coupon_type == CouponType.FREE_SHIPPING,
        coupon_type=coupon_type,
    )
    return CouponOutcome(code=code, coupon=coupon, discount=discount)


def _request(**overrides) -> QuoteRequest:
    values = {
        "items": [
            CartItem(product_id=1, category_id=10, price=Decimal("1000")),
            CartItem(product_id=2, category_id=10, price=Decimal("500"), quantity=2),
        ],
        "zone": "A",
        "weight": Decimal("1"),
        "order_date": ORDER_DATE,
    }
    values.update(overrides)
    return QuoteRequest(**values)


@pytest.fixture
def config():
    """Bundle, two carriers, express delivery, a taxable handling fee and GST."""
    return PricingConfig(
        tax_rules=(_gst(),),
        charge_rules=(_charge(),),
        carrier_services=(_carrier("dear", "80"), _carrier("cheap", "50")),
        delivery_options=(_express(),),
        bundle_rules=(_bundle(),),
    )


class TestFullQuote:
    def test_every_stage_contributes(self, config):
        request = _request(delivery_option_code="express")
        state = run_pipeline(initial_state(request, config, NOW))

        assert state.stages == tuple(stage.name for stage in DEFAULT_STAGES)
        assert state.subtotal == Decimal("2000.00")
        assert state.bundle_discount == Decimal("200.00")
        assert state.discounted_subtotal == Decimal("1800.00")
        assert state.shipping_quote is not None
        assert state.shipping_quote.carrier_service_code == "cheap"
        assert state.base_shipping == Decimal("50.00")
        assert state.shipping_charge == Decimal("100.00")
        assert state.charges.total_charges == Decimal("20.00")
        # GST on discounted subtotal + shipping + taxable charges
        assert state.taxes.exclusive_tax == Decimal("345.60")
        assert state.total == Decimal("2265.60")

    def test_response(self, config):
        request = _request(delivery_option_code="express")
        response = to_response(run_pipeline(initial_state(request, config, NOW)))

        assert response.currency == "INR"
        assert response.bundle_discount is not None
        assert response.bundle_discount.amount == Decimal("200.00")
        assert response.coupon is None
        assert response.discount_total == Decimal("200.00")
        assert response.delivery_option is not None
        assert response.delivery_option.estimated_delivery_min == date(2026, 10, 20)
        assert response.total == Decimal("2265.60")
        assert response.stages[0] == "bundle_discount"

    def test_requested_carrier(self, config):
        state = run_pipeline(initial_state(_request(carrier_service_code="dear"), config, NOW))
        assert state.shipping_charge == Decimal("80.00")

    def test_missing_zone_skips_shipping(self, config):
        state = run_pipeline(initial_state(_request(zone=None), config, NOW))
        assert state.shipping_quote is None
        assert state.shipping_charge == Decimal("0")
        assert "Shipping not quoted: zone and weight are required" in state.messages

    def test_unknown_zone(self, config):
        state = run_pipeline(initial_state(_request(zone="Q"), config, NOW))
        assert "No carrier rate available for zone Q" in state.messages

    def test_unavailable_delivery_option_keeps_base_shipping(self, config):
        state = run_pipeline(initial_state(_request(delivery_option_code="drone"), config, NOW))
        assert state.shipping_charge == Decimal("50.00")
        assert "Delivery option 'drone' is not available" in state.messages

    def test_custom_stage_list(self, config):
        stages = (PricingStage("bundle_discount", apply_bundle_discount),)
        state = run_pipeline(initial_state(_request(), config, NOW), stages)
        assert state.stages == ("bundle_discount",)
        assert state.discounted_subtotal == Decimal("1800.00")
        assert state.total == Decimal("0")


class TestCouponStage:
    def _state(self, config, outcome):
        state = initial_state(_request(), config, NOW, coupon_outcome=outcome)
        state = apply_bundle_discount(state)
        return apply_coupon_discount(state)

    def test_larger_coupon_replaces_bundle(self, config):
        state = self._state(config, _coupon_outcome(CouponType.PERCENTAGE, "300"))
        assert state.bundle_discount == Decimal("0")
        assert state.coupon_discount == Decimal("300")
        assert state.discounted_subtotal == Decimal("1700.00")
        assert "Coupon 'PROMO' replaces the bundle discount" in state.messages

    def test_smaller_coupon_loses_to_bundle(self, config):
        state = self._state(config, _coupon_outcome(CouponType.PERCENTAGE, "100"))
        assert state.bundle_discount == Decimal("200.00")
        assert state.coupon_discount == Decimal("0")
        assert state.discounted_subtotal == Decimal("1800.00")

    def test_stackable_coupon_adds_to_bundle(self, config):
        outcome = _coupon_outcome(CouponType.FIXED_AMOUNT, "100", is_stackable=True)
        state = self._state(config, outcome)
        assert state.bundle_discount == Decimal("200.00")
        assert state.coupon_discount == Decimal("100")
        assert state.discounted_subtotal == Decimal("1700.00")

    def test_discount_never_exceeds_subtotal(self, config):
        outcome = _coupon_outcome(CouponType.FIXED_AMOUNT, "5000", is_stackable=True)
        state = self._state(config, outcome)
        assert state.coupon_discount == Decimal("1800.00")
        assert state.discounted_subtotal == Decimal("0")

    def test_refused_coupon_becomes_message(self, config):
        outcome = CouponOutcome(code="NOPE", error="Coupon 'NOPE' not found")
        state = self._state(config, outcome)
        assert state.coupon_discount == Decimal("0")
        assert state.messages == ("Coupon 'NOPE' not found",)

    def test_free_shipping_zeroes_delivery_cost(self, config):
        request = _request(delivery_option_code="express", coupon_code="SHIPFREE")
        outcome = _coupon_outcome(CouponType.FREE_SHIPPING, "0", code="SHIPFREE")
        state = run_pipeline(initial_state(request, config, NOW, coupon_outcome=outcome))

        assert state.bundle_discount == Decimal("200.00")
        assert state.shipping_charge == Decimal("0")
        assert "Free shipping applied" in state.messages
        response = to_response(state)
        assert response.coupon is not None
        assert response.coupon.free_shipping


class TestInsuranceStage:
    def test_mandatory_plan_always_applies(self, config):
        config = replace(config, insurance_plans=(_plan(is_mandatory=True),))
        state = run_pipeline(initial_state(_request(), config, NOW))
        assert state.insurance is not None
        assert state.insurance.is_mandatory
        # 1% of the undiscounted subtotal
        assert state.insurance_premium == Decimal("20.00")

    def test_opt_in_picks_cheapest_plan(self, config):
        plans = (_plan("Gold", premium_percentage=Decimal("2")), _plan("Silver"))
        config = replace(config, insurance_plans=plans)

        skipped = run_pipeline(initial_state(_request(), config, NOW))
        opted = run_pipeline(initial_state(_request(include_insurance=True), config, NOW))

        assert skipped.insurance is None
        assert opted.insurance is not None
        assert opted.insurance.plan_name == "Silver"
        # insurance sits outside every tax base
        assert opted.total == skipped.total + Decimal("20.00")

    def test_unknown_plan(self, config):
        request = _request(insurance_plan_id=uuid4())
        state = run_pipeline(initial_state(request, config, NOW))
        assert "Requested insurance plan is not available" in state.messages

    def test_requested_plan_out_of_range(self, config):
        plan = _plan(min_order_value=Decimal("10000"))
        config = replace(config, insurance_plans=(plan,))
        state = run_pipeline(initial_state(_request(insurance_plan_id=plan.id), config, NOW))
        assert state.insurance is None
        assert "Order value outside coverage range" in state.messages


class TestTotals:
    def test_advance_payment_follows_final_total(self, config):
        cod_fee = _charge(
            "COD_FEE",
            apply_to=ChargeApplyTo.COD_ONLY,
            amount=Decimal("50"),
            is_taxable=False,
            conditions=OrderChargeConditions(
                advance_payment=AdvancePaymentConfig(required=True, value=Decimal("10"))
            ),
        )
        config = replace(config, charge_rules=(cod_fee,), tax_rules=())
        state = run_pipeline(initial_state(_request(payment_method="cod"), config, NOW))

        assert state.total == Decimal("1900.00")
        assert state.charges.advance_payment is not None
        assert state.charges.advance_payment.amount == Decimal("190.00")

    def test_inclusive_tax_is_not_added(self):
        vat = TaxRule(
            id=uuid4(),
            code="VAT",
            name="VAT",
            tax_type="vat",
            rate=Decimal("18"),
            is_enabled=True,
            is_inclusive=True,
            apply_on=TaxApplyOn.SUBTOTAL,
            priority=0,
        )
        request = _request(items=[CartItem(product_id=1, price=Decimal("118"))], zone=None)
        state = run_pipeline(initial_state(request, PricingConfig(tax_rules=(vat,)), NOW))

        assert state.taxes.inclusive_tax == Decimal("18.00")
        assert state.total == Decimal("118.00")
