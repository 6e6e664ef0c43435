"""Tests for PricingService quoting against stored configuration."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from storefront.core.cache import ConfigCache
from storefront.core.database import get_db
from storefront.models.coupon import CouponType
from storefront.models.order_charge import OrderCharge
from storefront.repositories.bundle_discount_rule_repository import BundleDiscountRuleRepository
from storefront.repositories.carrier_rate_card_repository import CarrierRateCardRepository
from storefront.repositories.carrier_service_repository import CarrierServiceRepository
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.customer_repository import CustomerRepository
from storefront.repositories.order_charge_repository import OrderChargeRepository
from storefront.repositories.shipping_insurance_repository import ShippingInsuranceRepository
from storefront.repositories.tax_configuration_repository import TaxConfigurationRepository
from storefront.schemas.bundle_discount_rule import BundleDiscountRuleCreate
from storefront.schemas.carrier import CarrierRateCardCreate, CarrierServiceCreate
from storefront.schemas.coupon import CouponCreate
from storefront.schemas.customer import CustomerCreate
from storefront.schemas.order_charge import OrderChargeCreate
from storefront.schemas.pricing import CartItem, QuoteRequest
from storefront.schemas.shipping_insurance import ShippingInsuranceCreate
from storefront.schemas.tax_configuration import TaxConfigurationCreate
from storefront.services.pricing_service import PricingService
from storefront.services.tax_service import CACHE_PREFIX as TAX_CACHE_PREFIX

NOW = datetime(2026, 10, 19, 6, 0, tzinfo=UTC)


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def cache():
    return ConfigCache(ttl_seconds=300)


@pytest.fixture
def gst(db_session):
    """18% GST on the subtotal."""
    return TaxConfigurationRepository(db_session).create(
        TaxConfigurationCreate(code="GST", name="GST", rate=Decimal("18"))
    )


@pytest.fixture
def carrier(db_session):
    """A surface carrier charging 50 for the first kg in zone A, 20 per extra half kg."""
    service = CarrierServiceRepository(db_session).create(
        CarrierServiceCreate(code="bluedart", name="Surface", carrier_name="Blue Dart")
    )
    CarrierRateCardRepository(db_session).create(
        service.id,
        CarrierRateCardCreate(
            zone_code="A",
            weight_min=Decimal("0"),
            weight_max=Decimal("1"),
            base_rate=Decimal("50"),
            effective_from=date(2026, 1, 1),
        ),
    )
    CarrierRateCardRepository(db_session).create(
        service.id,
        CarrierRateCardCreate(
            zone_code="A",
            weight_min=Decimal("1"),
            base_rate=Decimal("50"),
            additional_per_500g=Decimal("20"),
            effective_from=date(2026, 1, 1),
        ),
    )
    return service


def _request(**overrides) -> QuoteRequest:
    values = {
        "items": [
            CartItem(product_id=1, category_id=3, price=Decimal("400")),
            CartItem(product_id=2, category_id=3, price=Decimal("300"), quantity=2),
        ],
        "zone": "A",
        "weight": Decimal("2.2"),
        "order_date": date(2026, 10, 19),
    }
    values.update(overrides)
    return QuoteRequest(**values)


class TestQuote:
    def test_quote_from_stored_rules(self, db_session, cache, gst, carrier):
        response = PricingService(db_session, cache).quote(_request(), now=NOW)

        assert response.subtotal == Decimal("1000.00")
        # 1.2 kg over the slab is three extra half kilograms
        assert response.shipping_charge == Decimal("110.00")
        assert response.taxes.total_tax == Decimal("180.00")
        assert response.total == Decimal("1290.00")
        assert response.shipping_quote is not None
        assert response.shipping_quote.carrier_service_code == "bluedart"

    def test_unknown_customer(self, db_session, cache):
        with pytest.raises(ValueError, match="not found"):
            PricingService(db_session, cache).quote(_request(customer_id=uuid4()), now=NOW)

    def test_customer_tier_from_record(self, db_session, cache):
        BundleDiscountRuleRepository(db_session).create(
            BundleDiscountRuleCreate(
                name="Gold bundle", customer_tier="gold", discount_percentage=Decimal("10")
            )
        )
        gold = CustomerRepository(db_session).create(
            CustomerCreate(external_id="gold_1", name="Gold Customer", tier="gold")
        )
        service = PricingService(db_session, cache)

        anonymous = service.quote(_request(), now=NOW)
        member = service.quote(_request(customer_id=gold.id), now=NOW)

        assert anonymous.bundle_discount is None
        assert member.bundle_discount is not None
        assert member.bundle_discount.amount == Decimal("100.00")

    def test_coupon_applied(self, db_session, cache):
        CouponRepository(db_session).create(
            CouponCreate(
                code="FLAT150",
                name="Flat 150",
                type=CouponType.FIXED_AMOUNT,
                value=Decimal("150"),
                starts_at=NOW - timedelta(days=1),
            )
        )
        response = PricingService(db_session, cache).quote(
            _request(coupon_code="FLAT150"), now=NOW
        )
        assert response.coupon is not None
        assert response.coupon.amount == Decimal("150.00")
        assert response.discounted_subtotal == Decimal("850.00")

    def test_bad_coupon_does_not_block_quote(self, db_session, cache):
        response = PricingService(db_session, cache).quote(_request(coupon_code="NOPE"), now=NOW)
        assert response.coupon is None
        assert response.discounted_subtotal == Decimal("1000.00")
        assert any("NOPE" in message for message in response.messages)

    def test_cod_charge_and_mandatory_insurance(self, db_session, cache, carrier):
        OrderChargeRepository(db_session).create(
            OrderChargeCreate(
                code="COD_FEE",
                name="Cash on delivery fee",
                type="fixed",
                amount=Decimal("40"),
                apply_to="cod_only",
            )
        )
        ShippingInsuranceRepository(db_session).create(
            ShippingInsuranceCreate(
                name="Transit cover",
                premium_percentage=Decimal("1.5"),
                conditions=[{"type": "high_value_mandatory", "threshold": "1000"}],
            )
        )
        service = PricingService(db_session, cache)

        prepaid = service.quote(_request(), now=NOW)
        cod = service.quote(_request(payment_method="cod"), now=NOW)

        assert prepaid.charges.total_charges == Decimal("0")
        assert cod.charges.total_charges == Decimal("40.00")
        assert cod.insurance is not None
        assert cod.insurance.is_mandatory
        assert cod.insurance_premium == Decimal("15.00")


class TestConfigurationCache:
    def test_writes_are_invisible_until_invalidated(self, db_session, cache, gst):
        service = PricingService(db_session, cache)
        before = service.quote(_request(zone=None), now=NOW)

        TaxConfigurationRepository(db_session).create(
            TaxConfigurationCreate(code="CESS", name="Cess", rate=Decimal("1"))
        )
        cached = service.quote(_request(zone=None), now=NOW)
        cache.invalidate_prefix(TAX_CACHE_PREFIX)
        fresh = service.quote(_request(zone=None), now=NOW)

        assert before.taxes.total_tax == Decimal("180.00")
        assert cached.taxes.total_tax == Decimal("180.00")
        assert fresh.taxes.total_tax == Decimal("190.00")

    def test_load_config_snapshots_every_kind(self, db_session, cache, gst, carrier):
        config = PricingService(db_session, cache).load_config()
        assert [rule.code for rule in config.tax_rules] == ["GST"]
        assert [service.code for service in config.carrier_services] == ["bluedart"]
        assert len(config.carrier_services[0].rate_cards) == 2
        assert config.currency == "INR"


class TestStoredRuleValidation:
    def test_row_with_non_finite_tier_is_skipped(self, db_session, cache, gst):
        db_session.add(
            OrderCharge(
                code="BROKEN",
                name="Broken tier",
                type="tiered",
                tiers=[{"min": "0", "charge": "NaN"}],
            )
        )
        db_session.commit()

        response = PricingService(db_session, cache).quote(_request(zone=None), now=NOW)

        assert response.charges.total_charges == Decimal("0")
        assert response.total == Decimal("1180.00")
