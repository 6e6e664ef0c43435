"""Tax rule evaluation.

Every applicable rule contributes; rules are never collapsed into a single
winner. Inclusive rules extract the tax already contained in the amount,
exclusive rules add tax on top.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import assert_never

from storefront.models.tax_configuration import TaxApplyOn
from storefront.schemas.pricing import (
    ChargesSummary,
    OrderContext,
    TaxBreakdown,
    TaxLine,
    TaxSummary,
)
from storefront.schemas.tax_configuration import TaxRule
from storefront.services.rules.money import HUNDRED, ZERO, percent_of, round_money


def is_applicable(rule: TaxRule, context: OrderContext) -> bool:
    if not rule.is_enabled:
        return False

    conditions = rule.conditions
    if conditions is None:
        return True

    if conditions.state_based and conditions.states and context.state not in conditions.states:
        return False

    if conditions.product_categories and not set(context.categories) & set(
        conditions.product_categories
    ):
        return False

    if conditions.min_order_value is not None and context.order_value < conditions.min_order_value:
        return False

    return True


def applicable_taxes(rules: Iterable[TaxRule], context: OrderContext) -> list[TaxRule]:
    """Enabled rules whose conditions match, lowest priority value first."""
    matching = [rule for rule in rules if is_applicable(rule, context)]
    return sorted(matching, key=lambda rule: rule.priority)


def calculate_tax(rule: TaxRule, taxable_amount: Decimal) -> Decimal:
    if rule.is_inclusive:
        return taxable_amount - taxable_amount / (1 + rule.rate / HUNDRED)
    return percent_of(taxable_amount, rule.rate)


def taxable_amount(
    rule: TaxRule,
    subtotal: Decimal,
    shipping: Decimal = ZERO,
    charges: Decimal = ZERO,
) -> Decimal:
    """The base a rule is levied on, chosen by its ``apply_on``."""
    match rule.apply_on:
        case TaxApplyOn.SUBTOTAL:
            return subtotal
        case TaxApplyOn.SUBTOTAL_WITH_CHARGES:
            return subtotal + charges
        case TaxApplyOn.SUBTOTAL_WITH_SHIPPING:
            return subtotal + shipping
        case TaxApplyOn.SUBTOTAL_WITH_ALL:
            return subtotal + shipping + charges
        case _:
            assert_never(rule.apply_on)


def calculate_taxes(
    rules: Iterable[TaxRule],
    context: OrderContext,
    charges: ChargesSummary | None = None,
) -> TaxSummary:
    """Apply every matching rule and sum the results.

    Only taxable order charges widen the base of ``subtotal_with_charges``
    and ``subtotal_with_all`` rules.
    """
    subtotal = context.value_after_discount
    taxable_charges = charges.taxable_charges if charges else ZERO

    lines: list[TaxLine] = []
    inclusive = ZERO
    exclusive = ZERO
    for rule in applicable_taxes(rules, context):
        base = taxable_amount(rule, subtotal, context.shipping_cost, taxable_charges)
        amount = round_money(calculate_tax(rule, base))
        if rule.is_inclusive:
            inclusive += amount
        else:
            exclusive += amount
        lines.append(
            TaxLine(
                code=rule.code,
                name=rule.name,
                display_label=rule.display_label or rule.name,
                rate=rule.rate,
                amount=amount,
                taxable_amount=round_money(base),
                is_inclusive=rule.is_inclusive,
            )
        )

    return TaxSummary(
        taxes=lines,
        total_tax=inclusive + exclusive,
        inclusive_tax=inclusive,
        exclusive_tax=exclusive,
    )


def extract_inclusive_tax(amount: Decimal, rate: Decimal) -> Decimal:
    """Tax contained in a price that already includes it."""
    return round_money(amount - amount / (1 + rate / HUNDRED))


def tax_breakdown(amount: Decimal, rate: Decimal, is_inclusive: bool = False) -> TaxBreakdown:
    if is_inclusive:
        tax = extract_inclusive_tax(amount, rate)
        return TaxBreakdown(
            base_amount=round_money(amount) - tax,
            tax_amount=tax,
            total_amount=round_money(amount),
            rate=rate,
        )
    tax = round_money(percent_of(amount, rate))
    return TaxBreakdown(
        base_amount=round_money(amount),
        tax_amount=tax,
        total_amount=round_money(amount) + tax,
        rate=rate,
    )
