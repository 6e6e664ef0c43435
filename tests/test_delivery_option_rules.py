"""Tests for delivery option availability, pricing and delivery date estimates."""

from datetime import date, time
from decimal import Decimal
from uuid import uuid4

from storefront.schemas.delivery_option import DeliveryContext, DeliveryOptionRule
from storefront.services.rules.delivery_option import (
    available_options,
    calculate_cost,
    delivery_date,
    delivery_window,
    is_available,
    weekday_number,
)

MONDAY = date(2026, 10, 19)
FRIDAY = date(2026, 10, 23)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)


def _option(code: str = "standard", **overrides) -> DeliveryOptionRule:
    values = {
        "id": uuid4(),
        "code": code,
        "name": code.replace("_", " ").title(),
        "delivery_days_min": 3,
        "delivery_days_max": 5,
        "price_multiplier": Decimal("1"),
        "fixed_surcharge": Decimal("0"),
        "min_order_value": Decimal("0"),
        "is_active": True,
        "sort_order": 0,
    }
    values.update(overrides)
    return DeliveryOptionRule(**values)


class TestAvailability:
    def test_same_day_after_cutoff(self):
        """A same-day order placed at 15:30 misses a 14:00 cutoff."""
        option = _option("same_day", cutoff_time="14:00:00")
        late = DeliveryContext(order_date=MONDAY, order_time=time(15, 30))
        early = DeliveryContext(order_date=MONDAY, order_time=time(13, 0))
        assert not is_available(option, "A", Decimal("500"), late)
        assert is_available(option, "A", Decimal("500"), early)

    def test_cutoff_only_applies_to_same_day(self):
        option = _option("express", cutoff_time="14:00:00")
        late = DeliveryContext(order_date=MONDAY, order_time=time(15, 30))
        assert is_available(option, "A", Decimal("500"), late)

    def test_zones(self):
        option = _option(availability_zones=["A", "B"])
        context = DeliveryContext(order_date=MONDAY)
        assert is_available(option, "B", Decimal("100"), context)
        assert not is_available(option, "C", Decimal("100"), context)

    def test_min_order_value(self):
        option = _option(min_order_value=Decimal("1000"))
        context = DeliveryContext(order_date=MONDAY)
        assert not is_available(option, "A", Decimal("999"), context)

    def test_restricted_days(self):
        option = _option(restricted_days=[0])
        assert not is_available(option, "A", Decimal("100"), DeliveryContext(order_date=SUNDAY))
        assert is_available(option, "A", Decimal("100"), DeliveryContext(order_date=MONDAY))

    def test_inactive(self):
        option = _option(is_active=False)
        assert not is_available(option, "A", Decimal("100"), DeliveryContext(order_date=MONDAY))

    def test_availability_conditions(self):
        option = _option(
            availability_conditions=[
                {"type": "metro_only"},
                {"type": "high_value_only", "threshold": "5000"},
            ]
        )
        metro = DeliveryContext(order_date=MONDAY, is_metro=True)
        assert is_available(option, "A", Decimal("6000"), metro)
        assert not is_available(option, "A", Decimal("4000"), metro)
        assert not is_available(option, "A", Decimal("6000"), DeliveryContext(order_date=MONDAY))

    def test_weekday_only_and_exclude_remote(self):
        option = _option(
            availability_conditions=[{"type": "weekday_only"}, {"type": "exclude_remote"}]
        )
        assert is_available(option, "A", Decimal("1"), DeliveryContext(order_date=FRIDAY))
        assert not is_available(option, "A", Decimal("1"), DeliveryContext(order_date=SATURDAY))
        remote = DeliveryContext(order_date=FRIDAY, is_remote=True)
        assert not is_available(option, "A", Decimal("1"), remote)


class TestCost:
    def test_multiplier_and_surcharge(self):
        option = _option(price_multiplier=Decimal("1.5"), fixed_surcharge=Decimal("20"))
        quote = calculate_cost(
            option, Decimal("100"), Decimal("500"), DeliveryContext(order_date=MONDAY)
        )
        assert quote.cost == Decimal("170.00")

    def test_high_value_discount(self):
        option = _option(
            price_multiplier=Decimal("1.5"),
            fixed_surcharge=Decimal("20"),
            availability_conditions=[
                {"type": "high_value_discount", "threshold": "10000", "discount_percent": "10"}
            ],
        )
        context = DeliveryContext(order_date=MONDAY)
        assert calculate_cost(option, Decimal("100"), Decimal("12000"), context).cost == Decimal(
            "153.00"
        )
        assert calculate_cost(option, Decimal("100"), Decimal("9000"), context).cost == Decimal(
            "170.00"
        )

    def test_weekend_and_remote_surcharges(self):
        option = _option(
            availability_conditions=[
                {"type": "weekend_surcharge", "amount": "50"},
                {"type": "remote_surcharge", "amount": "100"},
            ]
        )
        weekday = DeliveryContext(order_date=MONDAY)
        weekend_remote = DeliveryContext(order_date=SATURDAY, is_remote=True)
        assert calculate_cost(option, Decimal("80"), Decimal("1"), weekday).cost == Decimal("80")
        assert calculate_cost(option, Decimal("80"), Decimal("1"), weekend_remote).cost == Decimal(
            "230.00"
        )


class TestDeliveryDates:
    def test_weekday_numbering(self):
        assert weekday_number(SUNDAY) == 0
        assert weekday_number(MONDAY) == 1
        assert weekday_number(SATURDAY) == 6

    def test_calendar_days(self):
        assert delivery_date(_option(), FRIDAY, 1) == SATURDAY

    def test_business_days_skip_weekend(self):
        assert delivery_date(_option(), FRIDAY, 1, business_days_only=True) == date(2026, 10, 26)

    def test_restricted_days_are_skipped(self):
        option = _option(restricted_days=[0])
        assert delivery_date(option, SATURDAY, 1) == date(2026, 10, 26)

    def test_every_day_restricted_falls_back_to_calendar_days(self):
        option = _option(restricted_days=[0, 1, 2, 3, 4, 5, 6])
        assert delivery_date(option, MONDAY, 2) == date(2026, 10, 21)

    def test_zero_days_is_order_date(self):
        assert delivery_date(_option(), MONDAY, 0) == MONDAY

    def test_quote_estimates(self):
        option = _option("express", delivery_days_min=1, delivery_days_max=2)
        context = DeliveryContext(order_date=MONDAY)
        quote = calculate_cost(option, Decimal("50"), Decimal("1"), context)
        assert quote.estimated_delivery_min == date(2026, 10, 20)
        assert quote.estimated_delivery_max == date(2026, 10, 21)

    def test_delivery_window(self):
        assert delivery_window(_option(delivery_days_min=1, delivery_days_max=1)) == (
            "1 business day"
        )
        assert delivery_window(_option(delivery_days_min=2, delivery_days_max=2)) == (
            "2 business days"
        )
        assert delivery_window(_option()) == "3-5 business days"


class TestAvailableOptions:
    def test_sorted_and_filtered(self):
        options = [
            _option("express", name="Express", sort_order=2),
            _option("economy", name="Economy", sort_order=1),
            _option("standard", name="Standard", sort_order=1),
            _option("same_day", name="Same Day", sort_order=0, availability_zones=["Z"]),
        ]
        quotes = available_options(
            options, "A", Decimal("100"), Decimal("40"), DeliveryContext(order_date=MONDAY)
        )
        assert [q.code for q in quotes] == ["economy", "standard", "express"]
