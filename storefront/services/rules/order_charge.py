"""Order charge evaluation (COD fees, handling fees, small-order fees...)."""

from collections.abc import Iterable
from decimal import Decimal
from typing import assert_never

from storefront.models.order_charge import ChargeApplyTo, OrderChargeType
from storefront.schemas.conditions import AdvancePaymentConfig, ChargeTier
from storefront.schemas.order_charge import OrderChargeRule
from storefront.schemas.pricing import AdvancePayment, ChargeLine, ChargesSummary, OrderContext
from storefront.services.rules.money import ZERO, percent_of, round_money

COD = "cod"


def _matches_payment_method(rule: OrderChargeRule, payment_method: str | None) -> bool:
    match rule.apply_to:
        case ChargeApplyTo.ALL | ChargeApplyTo.CONDITIONAL:
            return True
        case ChargeApplyTo.COD_ONLY:
            return payment_method == COD
        case ChargeApplyTo.ONLINE_ONLY:
            return payment_method != COD
        case ChargeApplyTo.SPECIFIC_PAYMENT_METHODS:
            return payment_method in (rule.payment_methods or [])
        case _:
            assert_never(rule.apply_to)


def _matches_conditions(rule: OrderChargeRule, context: OrderContext) -> bool:
    conditions = rule.conditions
    if conditions is None:
        return True

    value = context.order_value
    if conditions.min_order_value is not None and value < conditions.min_order_value:
        return False
    if conditions.max_order_value is not None and value > conditions.max_order_value:
        return False
    if conditions.exempt_above_value is not None and value >= conditions.exempt_above_value:
        return False
    if conditions.excluded_categories and set(context.categories) & set(
        conditions.excluded_categories
    ):
        return False
    if conditions.excluded_pincodes and context.pincode in conditions.excluded_pincodes:
        return False
    if conditions.included_states and context.state not in conditions.included_states:
        return False
    return True


def is_applicable(rule: OrderChargeRule, payment_method: str | None, context: OrderContext) -> bool:
    """Payment-method scoping AND conditions.

    Conditions are checked for every ``apply_to`` value, not only for
    ``conditional`` charges.
    """
    if not rule.is_enabled:
        return False
    return _matches_payment_method(rule, payment_method) and _matches_conditions(rule, context)


def applicable_charges(
    rules: Iterable[OrderChargeRule],
    payment_method: str | None,
    context: OrderContext,
) -> list[OrderChargeRule]:
    matching = [rule for rule in rules if is_applicable(rule, payment_method, context)]
    return sorted(matching, key=lambda rule: rule.priority)


def _tier_charge(tiers: list[ChargeTier], order_value: Decimal) -> Decimal:
    for tier in tiers:
        if order_value < tier.min:
            continue
        if tier.max is not None and order_value > tier.max:
            continue
        if tier.is_percentage:
            return percent_of(order_value, tier.charge_value)
        return tier.charge_value
    return ZERO


def calculate_charge(rule: OrderChargeRule, order_value: Decimal) -> Decimal:
    match rule.type:
        case OrderChargeType.FIXED:
            return rule.amount or ZERO
        case OrderChargeType.PERCENTAGE:
            return percent_of(order_value, rule.percentage or ZERO)
        case OrderChargeType.TIERED:
            return _tier_charge(rule.tiers or [], order_value)
        case _:
            assert_never(rule.type)


def advance_payment_config(rule: OrderChargeRule) -> AdvancePaymentConfig | None:
    """Advance payment settings; only COD-only charges can carry them."""
    if rule.apply_to != ChargeApplyTo.COD_ONLY or rule.conditions is None:
        return None
    return rule.conditions.advance_payment


def requires_advance_payment(rule: OrderChargeRule) -> bool:
    config = advance_payment_config(rule)
    return config is not None and config.required


def _advance_amount(kind: str, value: Decimal, order_total: Decimal) -> Decimal:
    if kind == "percentage":
        return round_money(percent_of(order_total, value))
    return round_money(value)


def calculate_advance_payment(rule: OrderChargeRule, order_total: Decimal) -> Decimal:
    config = advance_payment_config(rule)
    if config is None or not config.required:
        return ZERO
    return _advance_amount(config.type, config.value, order_total)


def with_order_total(advance: AdvancePayment, order_total: Decimal) -> AdvancePayment:
    """Re-price an advance payment against the final order total."""
    return advance.model_copy(
        update={"amount": _advance_amount(advance.type, advance.value, order_total)}
    )


def advance_payment(
    rules: Iterable[OrderChargeRule], order_total: Decimal
) -> AdvancePayment | None:
    """The advance payment demanded by the first charge that requires one."""
    for rule in rules:
        config = advance_payment_config(rule)
        if config is None or not config.required:
            continue
        return AdvancePayment(
            type=config.type,
            value=config.value,
            amount=calculate_advance_payment(rule, order_total),
            description=config.description,
        )
    return None


def charge_base(rule: OrderChargeRule, context: OrderContext) -> Decimal:
    if rule.apply_after_discount:
        return context.value_after_discount
    return context.order_value


def calculate_charges(rules: Iterable[OrderChargeRule], context: OrderContext) -> ChargesSummary:
    """Compose every applicable charge into priced lines.

    Each charge is evaluated against its own base: the discounted value when
    ``apply_after_discount`` is set, otherwise the original order value.
    Charges that price to zero are dropped.
    """
    applied: list[OrderChargeRule] = []
    lines: list[ChargeLine] = []
    for rule in sorted(rules, key=lambda r: r.priority):
        base = charge_base(rule, context)
        scoped = context.model_copy(update={"order_value": base})
        if not is_applicable(rule, context.payment_method, scoped):
            continue
        applied.append(rule)
        amount = round_money(calculate_charge(rule, base))
        if amount <= ZERO:
            continue
        lines.append(
            ChargeLine(
                code=rule.code,
                name=rule.name,
                display_label=rule.display_label or rule.name,
                type=rule.type.value,
                amount=amount,
                is_taxable=rule.is_taxable,
            )
        )

    taxable = sum((line.amount for line in lines if line.is_taxable), ZERO)
    non_taxable = sum((line.amount for line in lines if not line.is_taxable), ZERO)
    total = taxable + non_taxable
    order_total = context.value_after_discount + context.shipping_cost + total
    return ChargesSummary(
        charges=lines,
        total_charges=total,
        taxable_charges=taxable,
        non_taxable_charges=non_taxable,
        advance_payment=advance_payment(applied, order_total),
    )
