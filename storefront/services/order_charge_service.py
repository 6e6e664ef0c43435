"""Order charge service: which additional charges an order carries."""

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.order_charge_repository import OrderChargeRepository
from storefront.schemas.order_charge import OrderChargeRule
from storefront.schemas.pricing import ChargesSummary, OrderContext
from storefront.services.rules import order_charge
from storefront.services.snapshots import to_snapshots

CACHE_PREFIX = "pricing:order_charges"


class OrderChargeService:
    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.charge_repo = OrderChargeRepository(db)

    def load_rules(self) -> list[OrderChargeRule]:
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:enabled",
            lambda: to_snapshots(self.charge_repo.get_enabled(), OrderChargeRule, "order charge"),
        )

    def get_applicable_charges(
        self, payment_method: str | None, context: OrderContext
    ) -> list[OrderChargeRule]:
        return order_charge.applicable_charges(self.load_rules(), payment_method, context)

    def calculate_charges(self, context: OrderContext) -> ChargesSummary:
        return order_charge.calculate_charges(self.load_rules(), context)
