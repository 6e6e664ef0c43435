"""Bundle discount service: picks the single bundle rule for a cart."""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.bundle_discount_rule_repository import BundleDiscountRuleRepository
from storefront.schemas.bundle_discount_rule import BundleRule
from storefront.schemas.pricing import CartItem
from storefront.services.rules import bundle_discount
from storefront.services.snapshots import to_snapshots

CACHE_PREFIX = "pricing:bundles"


class BundleDiscountService:
    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.rule_repo = BundleDiscountRuleRepository(db)

    def load_rules(self) -> list[BundleRule]:
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:active",
            lambda: to_snapshots(self.rule_repo.get_active(), BundleRule, "bundle discount rule"),
        )

    def get_applicable_rule(
        self,
        product_count: int,
        category_id: int | None = None,
        customer_tier: str | None = None,
    ) -> BundleRule | None:
        return bundle_discount.get_applicable_rule(
            self.load_rules(), product_count, category_id, customer_tier, datetime.now(UTC)
        )

    def calculate(
        self, items: list[CartItem], customer_tier: str | None = None
    ) -> tuple[BundleRule | None, Decimal]:
        """The rule applied to a cart and the discount it yields."""
        rule = bundle_discount.select_rule(
            self.load_rules(), items, customer_tier, datetime.now(UTC)
        )
        if rule is None:
            return None, Decimal("0")
        total = sum((item.line_total for item in items), Decimal("0"))
        return rule, bundle_discount.calculate_discount(rule, total)
