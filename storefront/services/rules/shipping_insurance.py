"""Shipping insurance premiums, eligibility and mandatory-cover rules."""

from collections.abc import Iterable
from decimal import Decimal
from typing import assert_never

from storefront.schemas.conditions import (
    ElectronicsSurchargeCondition,
    FragileItemSurchargeCondition,
    FragileMandatoryCondition,
    HighValueDiscountCondition,
    HighValueMandatoryCondition,
    InsuranceCondition,
    InsuranceRemoteSurchargeCondition,
    RemoteAreaMandatoryCondition,
    ZoneMultiplierCondition,
)
from storefront.schemas.shipping_insurance import InsuranceContext, InsurancePlan, InsuranceQuote
from storefront.services.rules.money import HUNDRED, percent_of, round_money

OUTSIDE_RANGE = "Order value outside coverage range"


def is_in_range(plan: InsurancePlan, order_value: Decimal) -> bool:
    if order_value < plan.min_order_value:
        return False
    if plan.max_order_value is not None and order_value > plan.max_order_value:
        return False
    return True


def _apply_condition(
    condition: InsuranceCondition,
    premium: Decimal,
    order_value: Decimal,
    context: InsuranceContext,
) -> Decimal:
    match condition:
        case ZoneMultiplierCondition(zones=zones):
            if context.zone is not None and context.zone in zones:
                return premium * zones[context.zone]
            return premium
        case InsuranceRemoteSurchargeCondition(amount=amount):
            return premium + amount if context.is_remote else premium
        case HighValueDiscountCondition(threshold=threshold, discount_percent=percent):
            if order_value >= threshold:
                return premium * (1 - percent / HUNDRED)
            return premium
        case FragileItemSurchargeCondition(multiplier=multiplier):
            return premium * multiplier if context.has_fragile_items else premium
        case ElectronicsSurchargeCondition(multiplier=multiplier):
            return premium * multiplier if context.has_electronics else premium
        case (
            HighValueMandatoryCondition()
            | RemoteAreaMandatoryCondition()
            | FragileMandatoryCondition()
        ):
            return premium
        case _:
            assert_never(condition)


def _makes_mandatory(
    condition: InsuranceCondition,
    order_value: Decimal,
    context: InsuranceContext,
) -> bool:
    match condition:
        case HighValueMandatoryCondition(threshold=threshold):
            return order_value >= threshold
        case RemoteAreaMandatoryCondition():
            return context.is_remote
        case FragileMandatoryCondition():
            return context.has_fragile_items
        case (
            ZoneMultiplierCondition()
            | InsuranceRemoteSurchargeCondition()
            | HighValueDiscountCondition()
            | FragileItemSurchargeCondition()
            | ElectronicsSurchargeCondition()
        ):
            return False
        case _:
            assert_never(condition)


def is_mandatory(plan: InsurancePlan, order_value: Decimal, context: InsuranceContext) -> bool:
    """A plan is mandatory when one of its triggers fires, else per its flag."""
    if any(_makes_mandatory(c, order_value, context) for c in plan.conditions or []):
        return True
    return plan.is_mandatory


def calculate_premium(
    plan: InsurancePlan,
    order_value: Decimal,
    context: InsuranceContext,
) -> InsuranceQuote:
    if not is_in_range(plan, order_value):
        return InsuranceQuote(
            eligible=False, reason=OUTSIDE_RANGE, plan_id=plan.id, plan_name=plan.name
        )

    premium = percent_of(order_value, plan.premium_percentage)
    premium = max(premium, plan.minimum_premium)
    if plan.maximum_premium is not None:
        premium = min(premium, plan.maximum_premium)

    for condition in plan.conditions or []:
        premium = _apply_condition(condition, premium, order_value, context)

    coverage_cap = plan.max_order_value if plan.max_order_value is not None else order_value
    coverage = min(percent_of(order_value, plan.coverage_percentage), coverage_cap)

    return InsuranceQuote(
        eligible=True,
        premium=round_money(premium),
        coverage_amount=round_money(coverage),
        plan_id=plan.id,
        plan_name=plan.name,
        coverage_percentage=plan.coverage_percentage,
        claim_processing_days=plan.claim_processing_days,
        is_mandatory=is_mandatory(plan, order_value, context),
    )


def _candidates(plans: Iterable[InsurancePlan], order_value: Decimal) -> list[InsurancePlan]:
    eligible = [plan for plan in plans if plan.is_active and is_in_range(plan, order_value)]
    return sorted(eligible, key=lambda plan: (plan.premium_percentage, plan.name))


def mandatory_plan(
    plans: Iterable[InsurancePlan],
    order_value: Decimal,
    context: InsuranceContext,
) -> InsurancePlan | None:
    """The cheapest plan that must be applied to this order, if any."""
    for plan in _candidates(plans, order_value):
        if is_mandatory(plan, order_value, context):
            return plan
    return None


def is_mandatory_for(
    plans: Iterable[InsurancePlan],
    order_value: Decimal,
    context: InsuranceContext,
) -> bool:
    return mandatory_plan(plans, order_value, context) is not None


def available_plans(
    plans: Iterable[InsurancePlan],
    order_value: Decimal,
    context: InsuranceContext,
) -> list[InsuranceQuote]:
    """Eligible plans for an order, cheapest premium percentage first."""
    return [
        calculate_premium(plan, order_value, context) for plan in _candidates(plans, order_value)
    ]
