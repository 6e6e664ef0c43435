"""Coupon validity, eligibility and discount calculation."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import assert_never

from storefront.models.coupon import CouponType
from storefront.schemas.conditions import BuyXGetYConfig, DayTimeRestrictions
from storefront.schemas.coupon import CouponDiscount, CouponRule
from storefront.schemas.pricing import CartItem
from storefront.services.rules.money import HUNDRED, ZERO, percent_of, round_money

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


@dataclass(frozen=True)
class CouponHolder:
    """What coupon eligibility needs to know about a customer."""

    times_used: int = 0
    has_orders: bool = False
    group_codes: frozenset[str] = field(default_factory=frozenset)


def is_valid(coupon: CouponRule, now: datetime) -> bool:
    if not coupon.is_active:
        return False
    if now < coupon.starts_at:
        return False
    if coupon.expires_at is not None and now >= coupon.expires_at:
        return False
    if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
        return False
    return True


def is_within_time_restrictions(restrictions: DayTimeRestrictions, local_now: datetime) -> bool:
    if restrictions.allowed_days:
        if local_now.strftime("%A").lower() not in restrictions.allowed_days:
            return False
    hours = restrictions.allowed_hours
    if hours is not None and not hours.start <= local_now.hour <= hours.end:
        return False
    return True


def can_be_used_by(coupon: CouponRule, holder: CouponHolder, now: datetime, tz: tzinfo) -> bool:
    """Validity plus the per-customer checks.

    Day and hour windows are read in the store's timezone.
    """
    if not is_valid(coupon, now):
        return False
    if (
        coupon.usage_limit_per_customer is not None
        and holder.times_used >= coupon.usage_limit_per_customer
    ):
        return False
    if coupon.first_order_only and holder.has_orders:
        return False
    if coupon.applicable_customer_groups and not holder.group_codes & set(
        coupon.applicable_customer_groups
    ):
        return False
    if coupon.day_time_restrictions is not None and not is_within_time_restrictions(
        coupon.day_time_restrictions, now.astimezone(tz)
    ):
        return False
    return True


def is_applicable_to_product(coupon: CouponRule, item: CartItem) -> bool:
    """Exclusions win over allow-lists; no allow-list means every product."""
    if coupon.excluded_products and item.product_id in coupon.excluded_products:
        return False
    if coupon.excluded_categories and item.category_id in coupon.excluded_categories:
        return False
    if coupon.applicable_products:
        return item.product_id in coupon.applicable_products
    if coupon.applicable_categories:
        return item.category_id in coupon.applicable_categories
    return True


def applicable_items(coupon: CouponRule, items: Iterable[CartItem]) -> list[CartItem]:
    return [item for item in items if is_applicable_to_product(coupon, item)]


def eligible_subtotal(coupon: CouponRule, order_total: Decimal, items: list[CartItem]) -> Decimal:
    """The part of the order a percentage or fixed coupon may discount."""
    if not items:
        return order_total
    return sum((item.line_total for item in applicable_items(coupon, items)), ZERO)


def meets_minimum(coupon: CouponRule, order_total: Decimal) -> bool:
    return coupon.minimum_order_amount is None or order_total >= coupon.minimum_order_amount


def _buy_x_get_y(
    coupon: CouponRule,
    config: BuyXGetYConfig,
    items: list[CartItem],
) -> tuple[Decimal, list[CartItem]]:
    if config.product_id is not None:
        eligible = [item for item in items if item.product_id == config.product_id]
    else:
        eligible = applicable_items(coupon, items)

    total_quantity = sum(item.quantity for item in eligible)
    free_quantity = (total_quantity // config.buy_quantity) * config.get_quantity
    if free_quantity <= 0:
        return ZERO, []

    # Free units are taken from the cheapest items first
    discount = ZERO
    remaining = free_quantity
    for item in sorted(eligible, key=lambda i: i.price):
        if remaining <= 0:
            break
        free_here = min(remaining, item.quantity)
        discount += item.price * free_here
        remaining -= free_here
    return discount, eligible


def calculate_discount(
    coupon: CouponRule,
    order_total: Decimal,
    cart_items: list[CartItem] | None = None,
) -> CouponDiscount:
    items = cart_items or []
    discount = ZERO
    free_shipping = False
    discounted_items: list[CartItem] = []

    match coupon.type:
        case CouponType.PERCENTAGE:
            discount = percent_of(order_total, coupon.value)
            if coupon.maximum_discount_amount is not None:
                discount = min(discount, coupon.maximum_discount_amount)
        case CouponType.FIXED_AMOUNT:
            discount = min(coupon.value, order_total)
        case CouponType.FREE_SHIPPING:
            free_shipping = True
        case CouponType.BUY_X_GET_Y:
            config = coupon.buy_x_get_y_config or BuyXGetYConfig()
            discount, discounted_items = _buy_x_get_y(coupon, config, items)
        case _:
            assert_never(coupon.type)

    return CouponDiscount(
        discount_amount=round_money(max(discount, ZERO)),
        free_shipping=free_shipping,
        applicable_items=discounted_items,
        coupon_type=coupon.type,
    )


def formatted_value(coupon: CouponRule, currency: str = "INR") -> str:
    match coupon.type:
        case CouponType.PERCENTAGE:
            return f"{coupon.value.normalize():f}%"
        case CouponType.FIXED_AMOUNT:
            symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
            return f"{symbol}{round_money(coupon.value):,}"
        case CouponType.FREE_SHIPPING:
            return "Free Shipping"
        case CouponType.BUY_X_GET_Y:
            config = coupon.buy_x_get_y_config
            if config is None:
                return "Buy X Get Y"
            return f"Buy {config.buy_quantity} Get {config.get_quantity}"
        case _:
            assert_never(coupon.type)


def remaining_uses(coupon: CouponRule) -> int | None:
    if coupon.usage_limit is None:
        return None
    return max(0, coupon.usage_limit - coupon.usage_count)


def usage_percentage(coupon: CouponRule) -> Decimal:
    if not coupon.usage_limit:
        return ZERO
    return round_money(Decimal(coupon.usage_count) / Decimal(coupon.usage_limit) * HUNDRED)
