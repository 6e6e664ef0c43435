"""Service for quoting the full price of an order without persisting anything."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.core.config import settings
from storefront.repositories.customer_repository import CustomerRepository
from storefront.schemas.pricing import QuoteRequest, QuoteResponse
from storefront.services.bundle_discount_service import BundleDiscountService
from storefront.services.coupon_service import (
    CouponNotApplicableError,
    CouponNotFoundError,
    CouponService,
    CouponUsageLimitExceededError,
)
from storefront.services.delivery_option_service import DeliveryOptionService
from storefront.services.order_charge_service import OrderChargeService
from storefront.services.pricing_pipeline import (
    DEFAULT_STAGES,
    CouponOutcome,
    PricingConfig,
    PricingStage,
    initial_state,
    run_pipeline,
    to_response,
)
from storefront.services.shipping_insurance_service import ShippingInsuranceService
from storefront.services.shipping_rate_service import ShippingRateService
from storefront.services.tax_service import TaxCalculationService

logger = logging.getLogger(__name__)


class PricingService:
    """Service for pricing a cart end to end."""

    def __init__(
        self,
        db: Session,
        cache: ConfigCache,
        stages: tuple[PricingStage, ...] = DEFAULT_STAGES,
    ):
        self.db = db
        self.stages = stages
        self.customer_repo = CustomerRepository(db)
        self.coupon_service = CouponService(db)
        self.tax_service = TaxCalculationService(db, cache)
        self.charge_service = OrderChargeService(db, cache)
        self.shipping_service = ShippingRateService(db, cache)
        self.delivery_service = DeliveryOptionService(db, cache)
        self.insurance_service = ShippingInsuranceService(db, cache)
        self.bundle_service = BundleDiscountService(db, cache)

    def load_config(self) -> PricingConfig:
        return PricingConfig(
            tax_rules=tuple(self.tax_service.load_rules()),
            charge_rules=tuple(self.charge_service.load_rules()),
            carrier_services=tuple(self.shipping_service.load_services()),
            delivery_options=tuple(self.delivery_service.load_options()),
            insurance_plans=tuple(self.insurance_service.load_plans()),
            bundle_rules=tuple(self.bundle_service.load_rules()),
            currency=settings.CURRENCY,
        )

    def quote(self, request: QuoteRequest, now: datetime | None = None) -> QuoteResponse:
        """Price a cart through every pricing stage.

        Coupon problems are reported in ``messages`` rather than raised, so a
        bad code never blocks a quote.

        Raises:
            ValueError: If ``customer_id`` names no customer.
        """
        now = now or datetime.now(UTC)

        customer_tier = request.customer_tier
        if request.customer_id is not None:
            customer = self.customer_repo.get_by_id(request.customer_id)
            if not customer:
                raise ValueError(f"Customer {request.customer_id} not found")
            if customer_tier is None and customer.tier:
                customer_tier = str(customer.tier)

        state = initial_state(request, self.load_config(), now, customer_tier)
        if request.coupon_code:
            outcome = self._evaluate_coupon(request, state.subtotal, now)
            state = replace(state, coupon_outcome=outcome)

        state = run_pipeline(state, self.stages)
        logger.debug(
            "Quoted %d items: subtotal %s, total %s",
            len(request.items),
            state.subtotal,
            state.total,
        )
        return to_response(state)

    def _evaluate_coupon(
        self, request: QuoteRequest, subtotal: Decimal, now: datetime
    ) -> CouponOutcome:
        code = request.coupon_code or ""
        try:
            coupon, discount = self.coupon_service.evaluate(
                code, request.customer_id, subtotal, request.items, now
            )
        except (
            CouponNotFoundError,
            CouponNotApplicableError,
            CouponUsageLimitExceededError,
        ) as exc:
            return CouponOutcome(code=code, error=str(exc))
        return CouponOutcome(code=code, coupon=coupon, discount=discount)
