"""Bundle discount rule selection.

Exactly one rule applies to a cart: the best-ranked candidate by priority,
then by discount percentage. Bundle discounts never add up.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import assert_never

from storefront.models.bundle_discount_rule import BundleDiscountType
from storefront.schemas.bundle_discount_rule import BundleRule
from storefront.schemas.pricing import CartItem
from storefront.services.rules.coupon import CURRENCY_SYMBOLS
from storefront.services.rules.money import ZERO, percent_of, round_money


def is_currently_valid(rule: BundleRule, now: datetime) -> bool:
    if rule.valid_from is not None and rule.valid_from > now:
        return False
    if rule.valid_until is not None and rule.valid_until < now:
        return False
    return True


def _matches_scope(rule_value: object, requested: object) -> bool:
    # A rule without a scope applies everywhere; an unscoped request only
    # matches unscoped rules
    if rule_value is None:
        return True
    return requested is not None and rule_value == requested


def _ranked(rules: Iterable[BundleRule]) -> list[BundleRule]:
    return sorted(rules, key=lambda r: (r.priority, r.discount_percentage), reverse=True)


def candidate_rules(
    rules: Iterable[BundleRule],
    product_count: int,
    category_id: int | None,
    customer_tier: str | None,
    now: datetime,
) -> list[BundleRule]:
    matching = [
        rule
        for rule in rules
        if rule.is_active
        and is_currently_valid(rule, now)
        and rule.min_products <= product_count
        and (rule.max_products is None or product_count <= rule.max_products)
        and _matches_scope(rule.category_id, category_id)
        and _matches_scope(rule.customer_tier, customer_tier)
    ]
    return _ranked(matching)


def get_applicable_rule(
    rules: Iterable[BundleRule],
    product_count: int,
    category_id: int | None,
    customer_tier: str | None,
    now: datetime,
) -> BundleRule | None:
    candidates = candidate_rules(rules, product_count, category_id, customer_tier, now)
    return candidates[0] if candidates else None


def matches_conditions(rule: BundleRule, items: list[CartItem]) -> bool:
    conditions = rule.conditions
    if conditions is None:
        return True

    if conditions.brands:
        brands = {item.brand for item in items if item.brand}
        if not brands & set(conditions.brands):
            return False

    if conditions.min_total is not None and conditions.min_total > 0:
        total = sum((item.line_total for item in items), ZERO)
        if total < conditions.min_total:
            return False

    if conditions.product_ids:
        if not {item.product_id for item in items} & set(conditions.product_ids):
            return False

    return True


def select_rule(
    rules: Iterable[BundleRule],
    items: list[CartItem],
    customer_tier: str | None,
    now: datetime,
) -> BundleRule | None:
    """The best-ranked rule for a cart whose conditions the cart satisfies.

    Product count is the number of distinct cart lines. The category is only
    passed when every line shares one.
    """
    categories = {item.category_id for item in items}
    category_id = categories.pop() if len(categories) == 1 else None
    for rule in candidate_rules(rules, len(items), category_id, customer_tier, now):
        if matches_conditions(rule, items):
            return rule
    return None


def calculate_discount(rule: BundleRule, total: Decimal) -> Decimal:
    match rule.discount_type:
        case BundleDiscountType.PERCENTAGE:
            return round_money(percent_of(total, rule.discount_percentage))
        case BundleDiscountType.FIXED:
            return round_money(min(rule.fixed_discount, total))
        case _:
            assert_never(rule.discount_type)


def formatted_discount(rule: BundleRule, currency: str = "INR") -> str:
    if rule.discount_type == BundleDiscountType.PERCENTAGE:
        return f"{rule.discount_percentage.normalize():f}%"
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{symbol}{round_money(rule.fixed_discount):,}"
