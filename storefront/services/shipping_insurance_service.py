"""Shipping insurance service: plan eligibility and premiums."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache
from storefront.repositories.shipping_insurance_repository import ShippingInsuranceRepository
from storefront.schemas.shipping_insurance import (
    InsuranceContext,
    InsuranceOptionsResponse,
    InsurancePlan,
    InsuranceQuote,
)
from storefront.services.rules import shipping_insurance
from storefront.services.snapshots import to_snapshots

CACHE_PREFIX = "pricing:insurance"


class ShippingInsuranceService:
    def __init__(self, db: Session, cache: ConfigCache):
        self.db = db
        self.cache = cache
        self.insurance_repo = ShippingInsuranceRepository(db)

    def load_plans(self) -> list[InsurancePlan]:
        return self.cache.get_or_load(
            f"{CACHE_PREFIX}:active",
            lambda: to_snapshots(
                self.insurance_repo.get_active(), InsurancePlan, "shipping insurance plan"
            ),
        )

    def get_options(
        self, order_value: Decimal, context: InsuranceContext
    ) -> InsuranceOptionsResponse:
        plans = self.load_plans()
        return InsuranceOptionsResponse(
            is_mandatory=shipping_insurance.is_mandatory_for(plans, order_value, context),
            options=shipping_insurance.available_plans(plans, order_value, context),
        )

    def quote(
        self,
        order_value: Decimal,
        context: InsuranceContext,
        plan_id: UUID | None = None,
        opted_in: bool = False,
    ) -> InsuranceQuote | None:
        """The insurance an order carries.

        A mandatory plan is always applied. Otherwise the customer's chosen
        plan (or the cheapest eligible one) is applied only when they opted in.
        """
        plans = self.load_plans()
        mandatory = shipping_insurance.mandatory_plan(plans, order_value, context)
        if mandatory is not None:
            return shipping_insurance.calculate_premium(mandatory, order_value, context)
        if not opted_in:
            return None

        if plan_id is not None:
            for plan in plans:
                if plan.id == plan_id:
                    return shipping_insurance.calculate_premium(plan, order_value, context)
            return None

        options = shipping_insurance.available_plans(plans, order_value, context)
        return options[0] if options else None
