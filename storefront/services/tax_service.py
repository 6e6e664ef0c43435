"""Tax calculation service for determining and applying taxes."""

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.tax_configuration_repository import TaxConfigurationRepository
from storefront.schemas.pricing import ChargesSummary, OrderContext, TaxSummary
from storefront.schemas.tax_configuration import TaxRule
from storefront.services.rules import tax
from storefront.services.snapshots import to_snapshots

CACHE_PREFIX = "pricing:taxes"


class TaxCalculationService:
    """Service for tax rule lookup and calculation."""

    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.tax_repo = TaxConfigurationRepository(db)

    def load_rules(self) -> list[TaxRule]:
        """Enabled tax rules, cached as snapshots."""
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:enabled",
            lambda: to_snapshots(self.tax_repo.get_enabled(), TaxRule, "tax configuration"),
        )

    def get_applicable_taxes(self, context: OrderContext) -> list[TaxRule]:
        return tax.applicable_taxes(self.load_rules(), context)

    def calculate_taxes(
        self,
        context: OrderContext,
        charges: ChargesSummary | None = None,
    ) -> TaxSummary:
        return tax.calculate_taxes(self.load_rules(), context, charges)
