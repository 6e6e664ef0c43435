"""Tests for tax rule applicability and calculation."""

from decimal import Decimal
from uuid import uuid4

from storefront.models.tax_configuration import TaxApplyOn
from storefront.schemas.conditions import TaxConditions
from storefront.schemas.pricing import ChargesSummary, OrderContext
from storefront.schemas.tax_configuration import TaxRule
from storefront.services.rules.tax import (
    applicable_taxes,
    calculate_taxes,
    extract_inclusive_tax,
    is_applicable,
    tax_breakdown,
    taxable_amount,
)


def _tax(code: str = "GST", rate: str = "18", **overrides) -> TaxRule:
    values = {
        "id": uuid4(),
        "code": code,
        "name": code,
        "tax_type": "gst",
        "rate": Decimal(rate),
        "is_enabled": True,
        "is_inclusive": False,
        "apply_on": TaxApplyOn.SUBTOTAL,
        "conditions": None,
        "priority": 0,
    }
    values.update(overrides)
    return TaxRule(**values)


class TestInclusiveTax:
    def test_extracts_tax_contained_in_price(self):
        """18% inclusive tax in 118 is 18."""
        assert extract_inclusive_tax(Decimal("118"), Decimal("18")) == Decimal("18.00")

    def test_inclusive_breakdown(self):
        breakdown = tax_breakdown(Decimal("118"), Decimal("18"), is_inclusive=True)
        assert breakdown.base_amount == Decimal("100.00")
        assert breakdown.tax_amount == Decimal("18.00")
        assert breakdown.total_amount == Decimal("118.00")

    def test_exclusive_breakdown(self):
        breakdown = tax_breakdown(Decimal("100"), Decimal("18"))
        assert breakdown.base_amount == Decimal("100.00")
        assert breakdown.tax_amount == Decimal("18.00")
        assert breakdown.total_amount == Decimal("118.00")


class TestApplicability:
    def test_disabled_rule_never_applies(self):
        assert not is_applicable(_tax(is_enabled=False), OrderContext())

    def test_state_based(self):
        rule = _tax(conditions=TaxConditions(state_based=True, states=["KA"]))
        assert is_applicable(rule, OrderContext(state="KA"))
        assert not is_applicable(rule, OrderContext(state="MH"))
        assert not is_applicable(rule, OrderContext())

    def test_product_categories_need_overlap(self):
        rule = _tax(conditions=TaxConditions(product_categories=[3, 4]))
        assert is_applicable(rule, OrderContext(categories=[1, 4]))
        assert not is_applicable(rule, OrderContext(categories=[1, 2]))

    def test_min_order_value(self):
        rule = _tax(conditions=TaxConditions(min_order_value=Decimal("500")))
        assert is_applicable(rule, OrderContext(order_value=Decimal("500")))
        assert not is_applicable(rule, OrderContext(order_value=Decimal("499.99")))

    def test_ordered_by_priority(self):
        later = _tax("CESS", priority=5)
        first = _tax("GST", priority=1)
        assert [r.code for r in applicable_taxes([later, first], OrderContext())] == [
            "GST",
            "CESS",
        ]


class TestTaxableAmount:
    def test_every_base(self):
        subtotal, shipping, charges = Decimal("1000"), Decimal("100"), Decimal("50")
        expected = {
            TaxApplyOn.SUBTOTAL: Decimal("1000"),
            TaxApplyOn.SUBTOTAL_WITH_CHARGES: Decimal("1050"),
            TaxApplyOn.SUBTOTAL_WITH_SHIPPING: Decimal("1100"),
            TaxApplyOn.SUBTOTAL_WITH_ALL: Decimal("1150"),
        }
        for apply_on, amount in expected.items():
            assert taxable_amount(_tax(apply_on=apply_on), subtotal, shipping, charges) == amount


class TestCalculateTaxes:
    def test_every_matching_rule_contributes(self):
        rules = [
            _tax("GST", "18", priority=1),
            _tax("CESS", "1", priority=2, apply_on=TaxApplyOn.SUBTOTAL_WITH_SHIPPING),
        ]
        context = OrderContext(order_value=Decimal("1000"), shipping_cost=Decimal("100"))

        summary = calculate_taxes(rules, context)

        assert [line.code for line in summary.taxes] == ["GST", "CESS"]
        assert summary.taxes[0].amount == Decimal("180.00")
        assert summary.taxes[1].amount == Decimal("11.00")
        assert summary.taxes[1].taxable_amount == Decimal("1100.00")
        assert summary.total_tax == Decimal("191.00")
        assert summary.exclusive_tax == Decimal("191.00")
        assert summary.inclusive_tax == Decimal("0")

    def test_inclusive_and_exclusive_are_split(self):
        rules = [_tax("VAT", "18", is_inclusive=True), _tax("CESS", "2")]
        summary = calculate_taxes(rules, OrderContext(order_value=Decimal("118")))
        assert summary.inclusive_tax == Decimal("18.00")
        assert summary.exclusive_tax == Decimal("2.36")
        assert summary.total_tax == Decimal("20.36")

    def test_uses_discounted_value(self):
        context = OrderContext(order_value=Decimal("1000"), discounted_value=Decimal("800"))
        summary = calculate_taxes([_tax()], context)
        assert summary.total_tax == Decimal("144.00")

    def test_only_taxable_charges_widen_base(self):
        rule = _tax("GST", "10", apply_on=TaxApplyOn.SUBTOTAL_WITH_CHARGES)
        charges = ChargesSummary(
            total_charges=Decimal("80"),
            taxable_charges=Decimal("50"),
            non_taxable_charges=Decimal("30"),
        )
        summary = calculate_taxes([rule], OrderContext(order_value=Decimal("500")), charges)
        assert summary.total_tax == Decimal("55.00")

    def test_display_label_falls_back_to_name(self):
        summary = calculate_taxes(
            [_tax("GST", display_label=None), _tax("CESS", "1", display_label="Cess (1%)")],
            OrderContext(order_value=Decimal("100")),
        )
        assert [line.display_label for line in summary.taxes] == ["GST", "Cess (1%)"]

    def test_no_rules(self):
        summary = calculate_taxes([], OrderContext(order_value=Decimal("100")))
        assert summary.taxes == []
        assert summary.total_tax == Decimal("0")
