"""Delivery option availability, pricing and delivery date estimates.

A single ``availability_conditions`` list drives both availability
(metro_only, exclude_remote, weekday_only, high_value_only) and pricing
(high_value_discount, weekend_surcharge, remote_surcharge); each evaluator
ignores the kinds that belong to the other.
"""

from collections.abc import Iterable
from datetime import date, time, timedelta
from decimal import Decimal
from typing import assert_never

from storefront.schemas.conditions import (
    DeliveryCondition,
    DeliveryRemoteSurchargeCondition,
    ExcludeRemoteCondition,
    HighValueDiscountCondition,
    HighValueOnlyCondition,
    MetroOnlyCondition,
    WeekdayOnlyCondition,
    WeekendSurchargeCondition,
)
from storefront.schemas.delivery_option import (
    DeliveryContext,
    DeliveryOptionQuote,
    DeliveryOptionRule,
)
from storefront.services.rules.money import HUNDRED, round_money

SAME_DAY = "same_day"


def weekday_number(day: date) -> int:
    """Weekday with 0 = Sunday through 6 = Saturday."""
    return (day.weekday() + 1) % 7


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def _condition_allows(
    condition: DeliveryCondition,
    order_value: Decimal,
    context: DeliveryContext,
) -> bool:
    match condition:
        case MetroOnlyCondition():
            return context.is_metro
        case ExcludeRemoteCondition():
            return not context.is_remote
        case WeekdayOnlyCondition():
            return not is_weekend(context.order_date)
        case HighValueOnlyCondition(threshold=threshold):
            return order_value >= threshold
        case (
            HighValueDiscountCondition()
            | WeekendSurchargeCondition()
            | DeliveryRemoteSurchargeCondition()
        ):
            return True
        case _:
            assert_never(condition)


def _apply_pricing(
    condition: DeliveryCondition,
    cost: Decimal,
    order_value: Decimal,
    context: DeliveryContext,
) -> Decimal:
    match condition:
        case HighValueDiscountCondition(threshold=threshold, discount_percent=percent):
            if order_value >= threshold:
                return cost * (1 - percent / HUNDRED)
            return cost
        case WeekendSurchargeCondition(amount=amount):
            return cost + amount if is_weekend(context.order_date) else cost
        case DeliveryRemoteSurchargeCondition(amount=amount):
            return cost + amount if context.is_remote else cost
        case (
            MetroOnlyCondition()
            | ExcludeRemoteCondition()
            | WeekdayOnlyCondition()
            | HighValueOnlyCondition()
        ):
            return cost
        case _:
            assert_never(condition)


def _past_cutoff(option: DeliveryOptionRule, order_time: time | None) -> bool:
    if option.code != SAME_DAY or not option.cutoff_time or order_time is None:
        return False
    cutoff = time.fromisoformat(option.cutoff_time).strftime("%H:%M:%S")
    return order_time.strftime("%H:%M:%S") > cutoff


def is_available(
    option: DeliveryOptionRule,
    zone: str,
    order_value: Decimal,
    context: DeliveryContext,
) -> bool:
    if not option.is_active:
        return False
    if option.availability_zones and zone not in option.availability_zones:
        return False
    if order_value < option.min_order_value:
        return False
    if _past_cutoff(option, context.order_time):
        return False
    if option.restricted_days and weekday_number(context.order_date) in option.restricted_days:
        return False
    return all(
        _condition_allows(condition, order_value, context)
        for condition in option.availability_conditions or []
    )


def delivery_date(
    option: DeliveryOptionRule,
    start: date,
    days: int,
    business_days_only: bool = False,
) -> date:
    """Walk forward ``days`` deliverable days from ``start``.

    Restricted weekdays are skipped, and weekends too when
    ``business_days_only`` is set.
    """
    skipped = set(option.restricted_days or [])
    if business_days_only:
        skipped |= {0, 6}
    if len(skipped) >= 7:
        skipped = set()

    current = start
    counted = 0
    while counted < days:
        current += timedelta(days=1)
        if weekday_number(current) in skipped:
            continue
        counted += 1
    return current


def delivery_window(option: DeliveryOptionRule) -> str:
    if option.delivery_days_min == option.delivery_days_max:
        if option.delivery_days_min == 1:
            return "1 business day"
        return f"{option.delivery_days_min} business days"
    return f"{option.delivery_days_min}-{option.delivery_days_max} business days"


def calculate_cost(
    option: DeliveryOptionRule,
    base_shipping: Decimal,
    order_value: Decimal,
    context: DeliveryContext,
) -> DeliveryOptionQuote:
    cost = base_shipping * option.price_multiplier + option.fixed_surcharge
    for condition in option.availability_conditions or []:
        cost = _apply_pricing(condition, cost, order_value, context)

    return DeliveryOptionQuote(
        option_id=option.id,
        code=option.code,
        name=option.name,
        description=option.description,
        cost=round_money(cost),
        delivery_days_min=option.delivery_days_min,
        delivery_days_max=option.delivery_days_max,
        estimated_delivery_min=delivery_date(
            option, context.order_date, option.delivery_days_min, context.business_days_only
        ),
        estimated_delivery_max=delivery_date(
            option, context.order_date, option.delivery_days_max, context.business_days_only
        ),
        delivery_window=delivery_window(option),
    )


def available_options(
    options: Iterable[DeliveryOptionRule],
    zone: str,
    order_value: Decimal,
    base_shipping: Decimal,
    context: DeliveryContext,
) -> list[DeliveryOptionQuote]:
    """Priced quotes for every available option, by sort_order then name."""
    ordered = sorted(options, key=lambda option: (option.sort_order, option.name))
    return [
        calculate_cost(option, base_shipping, order_value, context)
        for option in ordered
        if is_available(option, zone, order_value, context)
    ]
