"""Tests for order charge evaluation: payment-method scoping, tiers and advance payment."""

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from storefront.models.order_charge import ChargeApplyTo, OrderChargeType
from storefront.schemas.conditions import AdvancePaymentConfig, ChargeTier, OrderChargeConditions
from storefront.schemas.order_charge import OrderChargeRule
from storefront.schemas.pricing import AdvancePayment, OrderContext
from storefront.services.rules.order_charge import (
    advance_payment,
    calculate_charge,
    calculate_charges,
    is_applicable,
    requires_advance_payment,
    with_order_total,
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
        "is_taxable": False,
        "apply_after_discount": True,
        "is_refundable": False,
    }
    values.update(overrides)
    return OrderChargeRule(**values)


def _tiered() -> OrderChargeRule:
    return _charge(
        "SMALL_ORDER",
        type=OrderChargeType.TIERED,
        amount=None,
        tiers=[
            ChargeTier(min=Decimal("0"), max=Decimal("500"), charge="5%"),
            ChargeTier(min=Decimal("501"), charge=50),
        ],
    )


class TestTieredCharge:
    def test_percentage_tier(self):
        assert calculate_charge(_tiered(), Decimal("300")) == Decimal("15.00")

    def test_flat_tier(self):
        assert calculate_charge(_tiered(), Decimal("600")) == Decimal("50.00")

    def test_gap_between_tiers_is_free(self):
        assert calculate_charge(_tiered(), Decimal("500.50")) == Decimal("0")

    def test_tier_charge_keeps_its_form(self):
        tier = ChargeTier(charge=50)
        assert tier.charge == "50"
        assert not tier.is_percentage
        assert ChargeTier(charge=" 2.5% ").charge_value == Decimal("2.5")

    @pytest.mark.parametrize("charge", ["NaN", "sNaN", "Infinity", "-Infinity%", "NaN%", "-5"])
    def test_non_finite_or_negative_charge_rejected(self, charge):
        with pytest.raises(ValidationError):
            ChargeTier(charge=charge)

    def test_float_nan_rejected(self):
        with pytest.raises(ValidationError):
            ChargeTier(charge=float("nan"))


class TestPaymentMethodScoping:
    def test_cod_only(self):
        rule = _charge(apply_to=ChargeApplyTo.COD_ONLY)
        assert is_applicable(rule, "cod", OrderContext())
        assert not is_applicable(rule, "online", OrderContext())

    def test_online_only(self):
        rule = _charge(apply_to=ChargeApplyTo.ONLINE_ONLY)
        assert is_applicable(rule, "upi", OrderContext())
        assert not is_applicable(rule, "cod", OrderContext())

    def test_specific_payment_methods(self):
        rule = _charge(
            apply_to=ChargeApplyTo.SPECIFIC_PAYMENT_METHODS, payment_methods=["card", "emi"]
        )
        assert is_applicable(rule, "emi", OrderContext())
        assert not is_applicable(rule, "upi", OrderContext())

    def test_disabled(self):
        assert not is_applicable(_charge(is_enabled=False), "online", OrderContext())


class TestConditions:
    def test_exempt_above_value(self):
        rule = _charge(conditions=OrderChargeConditions(exempt_above_value=Decimal("1000")))
        assert is_applicable(rule, "online", OrderContext(order_value=Decimal("999")))
        assert not is_applicable(rule, "online", OrderContext(order_value=Decimal("1000")))

    def test_value_range(self):
        conditions = OrderChargeConditions(
            min_order_value=Decimal("100"), max_order_value=Decimal("500")
        )
        rule = _charge(conditions=conditions)
        assert not is_applicable(rule, "online", OrderContext(order_value=Decimal("99")))
        assert is_applicable(rule, "online", OrderContext(order_value=Decimal("250")))
        assert not is_applicable(rule, "online", OrderContext(order_value=Decimal("501")))

    def test_excluded_pincodes_and_categories(self):
        rule = _charge(
            conditions=OrderChargeConditions(excluded_pincodes=["560001"], excluded_categories=[7])
        )
        assert not is_applicable(rule, "online", OrderContext(pincode="560001"))
        assert not is_applicable(rule, "online", OrderContext(categories=[3, 7]))
        assert is_applicable(rule, "online", OrderContext(pincode="110001", categories=[3]))

    def test_included_states(self):
        rule = _charge(conditions=OrderChargeConditions(included_states=["KA", "TN"]))
        assert is_applicable(rule, "online", OrderContext(state="TN"))
        assert not is_applicable(rule, "online", OrderContext(state="DL"))

    def test_conditions_checked_for_cod_only_charges(self):
        rule = _charge(
            apply_to=ChargeApplyTo.COD_ONLY,
            conditions=OrderChargeConditions(max_order_value=Decimal("1000")),
        )
        assert not is_applicable(rule, "cod", OrderContext(order_value=Decimal("5000")))


class TestCalculateCharges:
    def test_lines_totals_and_taxable_split(self):
        rules = [
            _charge("HANDLING", amount=Decimal("20"), is_taxable=True, priority=1),
            _charge(
                "COD_FEE",
                type=OrderChargeType.PERCENTAGE,
                amount=None,
                percentage=Decimal("2"),
                apply_to=ChargeApplyTo.COD_ONLY,
                priority=2,
            ),
        ]
        context = OrderContext(order_value=Decimal("1000"), payment_method="cod")

        summary = calculate_charges(rules, context)

        assert [line.code for line in summary.charges] == ["HANDLING", "COD_FEE"]
        assert summary.total_charges == Decimal("40.00")
        assert summary.taxable_charges == Decimal("20.00")
        assert summary.non_taxable_charges == Decimal("20.00")

    def test_zero_charges_are_dropped(self):
        summary = calculate_charges([_charge(amount=Decimal("0"))], OrderContext())
        assert summary.charges == []
        assert summary.total_charges == Decimal("0")

    def test_before_and_after_discount_bases(self):
        after = _charge(
            "AFTER", type=OrderChargeType.PERCENTAGE, amount=None, percentage=Decimal("2")
        )
        before = _charge(
            "BEFORE",
            type=OrderChargeType.PERCENTAGE,
            amount=None,
            percentage=Decimal("2"),
            apply_after_discount=False,
        )
        context = OrderContext(order_value=Decimal("1000"), discounted_value=Decimal("800"))

        amounts = {line.code: line.amount for line in calculate_charges([after, before], context)}

        assert amounts == {"AFTER": Decimal("16.00"), "BEFORE": Decimal("20.00")}

    def test_conditions_read_the_charge_base(self):
        rule = _charge(conditions=OrderChargeConditions(min_order_value=Decimal("900")))
        context = OrderContext(order_value=Decimal("1000"), discounted_value=Decimal("800"))
        assert calculate_charges([rule], context).charges == []


class TestAdvancePayment:
    def _cod_rule(self, **config) -> OrderChargeRule:
        return _charge(
            "COD_FEE",
            apply_to=ChargeApplyTo.COD_ONLY,
            amount=Decimal("50"),
            conditions=OrderChargeConditions(advance_payment=AdvancePaymentConfig(**config)),
        )

    def test_percentage_of_order_total(self):
        rule = self._cod_rule(required=True, type="percentage", value=Decimal("10"))
        context = OrderContext(order_value=Decimal("1000"), payment_method="cod")

        summary = calculate_charges([rule], context)

        assert summary.advance_payment is not None
        assert summary.advance_payment.amount == Decimal("105.00")

    def test_fixed_amount(self):
        rule = self._cod_rule(required=True, type="fixed", value=Decimal("199"))
        advance = advance_payment([rule], Decimal("5000"))
        assert advance is not None
        assert advance.amount == Decimal("199.00")

    def test_not_required(self):
        rule = self._cod_rule(required=False, value=Decimal("10"))
        assert not requires_advance_payment(rule)
        assert advance_payment([rule], Decimal("1000")) is None

    def test_only_cod_only_charges_carry_advance_payment(self):
        rule = _charge(
            conditions=OrderChargeConditions(
                advance_payment=AdvancePaymentConfig(required=True, value=Decimal("10"))
            )
        )
        assert not requires_advance_payment(rule)
        assert advance_payment([rule], Decimal("1000")) is None

    def test_reprice_against_final_total(self):
        advance = AdvancePayment(type="percentage", value=Decimal("10"), amount=Decimal("105"))
        assert with_order_total(advance, Decimal("1234.50")).amount == Decimal("123.45")
