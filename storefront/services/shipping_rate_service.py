"""Shipping rate service: carrier quotes from rate cards."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.carrier_service_repository import CarrierServiceRepository
from storefront.schemas.carrier import CarrierServiceRates, ShipmentOptions, ShippingQuote
from storefront.services.rules import carrier_rate
from storefront.services.snapshots import to_snapshots

logger = logging.getLogger(__name__)

CACHE_PREFIX = "pricing:carriers"


class ShippingRateService:
    """Service for quoting shipping charges across carrier services."""

    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.carrier_repo = CarrierServiceRepository(db)

    def load_services(self) -> list[CarrierServiceRates]:
        """Active carrier services with their rate cards, cached as snapshots."""
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:active",
            lambda: to_snapshots(
                self.carrier_repo.get_active_with_rate_cards(),
                CarrierServiceRates,
                "carrier service",
            ),
        )

    def quote_rates(
        self,
        zone: str,
        weight: Decimal,
        options: ShipmentOptions,
        ship_date: date | None = None,
    ) -> list[ShippingQuote]:
        """Quotes from every carrier service serving the zone, cheapest first."""
        on = ship_date or date.today()
        return carrier_rate.quote_rates(self.load_services(), zone, weight, options, on)

    def get_quote(
        self,
        zone: str,
        weight: Decimal,
        options: ShipmentOptions,
        carrier_service_code: str | None = None,
        ship_date: date | None = None,
    ) -> ShippingQuote | None:
        """The requested carrier service's quote, or the cheapest one.

        Raises:
            ValueError: If ``carrier_service_code`` names no active service.
        """
        if carrier_service_code is not None and not any(
            s.code == carrier_service_code for s in self.load_services()
        ):
            raise ValueError(f"Carrier service '{carrier_service_code}' not found")

        quotes = self.quote_rates(zone, weight, options, ship_date)
        if carrier_service_code is not None:
            quotes = [q for q in quotes if q.carrier_service_code == carrier_service_code]
        if not quotes:
            logger.warning("No rate card covers zone %s at weight %s", zone, weight)
            return None
        return quotes[0]
