"""Delivery option service: available speeds and their prices."""

from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.delivery_option_repository import DeliveryOptionRepository
from storefront.schemas.delivery_option import (
    DeliveryContext,
    DeliveryOptionQuote,
    DeliveryOptionRule,
)
from storefront.services.rules import delivery_option
from storefront.services.snapshots import to_snapshots

CACHE_PREFIX = "pricing:delivery_options"


class DeliveryOptionService:
    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.option_repo = DeliveryOptionRepository(db)

    def load_options(self) -> list[DeliveryOptionRule]:
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:active",
            lambda: to_snapshots(
                self.option_repo.get_active(), DeliveryOptionRule, "delivery option"
            ),
        )

    def available_options(
        self,
        zone: str,
        order_value: Decimal,
        base_shipping: Decimal,
        context: DeliveryContext,
    ) -> list[DeliveryOptionQuote]:
        return delivery_option.available_options(
            self.load_options(), zone, order_value, base_shipping, context
        )

    def quote_option(
        self,
        code: str,
        zone: str,
        order_value: Decimal,
        base_shipping: Decimal,
        context: DeliveryContext,
    ) -> DeliveryOptionQuote | None:
        """Price one option by code; None when it is unknown or unavailable."""
        for option in self.load_options():
            if option.code != code:
                continue
            if not delivery_option.is_available(option, zone, order_value, context):
                return None
            return delivery_option.calculate_cost(option, base_shipping, order_value, context)
        return None
