"""Coupon service: validation against an order and atomic redemption."""

import logging
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.models.coupon import Coupon
from storefront.models.coupon_usage import CouponUsage
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.coupon_usage_repository import CouponUsageRepository
from storefront.repositories.customer_repository import CustomerRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.coupon import (
    CouponAnalyticsResponse,
    CouponDiscount,
    CouponRedeemRequest,
    CouponResponse,
    CouponRule,
    CouponValidateResponse,
)
from storefront.schemas.pricing import CartItem
from storefront.services.rules import coupon as coupon_rules
from storefront.services.rules.coupon import CouponHolder
from storefront.services.rules.money import ZERO, round_money

logger = logging.getLogger(__name__)


class CouponNotFoundError(ValueError):
    pass


class CouponNotApplicableError(ValueError):
    """The coupon exists but cannot be used for this customer or order."""


class CouponUsageLimitExceededError(ValueError):
    pass


class CouponAlreadyRedeemedError(ValueError):
    pass


class CouponService:
    """Service for coupon validation, discount calculation and redemption.

    Coupons are read fresh on every call rather than through the
    configuration cache because usage_count changes at order time.
    """

    def __init__(self, db: Session, timezone: str | None = None):
        self.db = db
        self.tz = ZoneInfo(timezone or settings.STORE_TIMEZONE)
        self.coupon_repo = CouponRepository(db)
        self.usage_repo = CouponUsageRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.order_repo = OrderRepository(db)

    def get_rule(self, code: str) -> CouponRule:
        coupon = self.coupon_repo.get_by_code(code)
        if not coupon:
            raise CouponNotFoundError(f"Coupon '{code}' not found")
        return CouponRule.model_validate(coupon)

    def holder_for(
        self,
        coupon: CouponRule,
        customer_id: UUID | None,
        exclude_order_id: UUID | None = None,
    ) -> CouponHolder:
        """Build the customer facts the eligibility checks read.

        Raises:
            ValueError: If the customer does not exist.
        """
        if customer_id is None:
            return CouponHolder()

        customer = self.customer_repo.get_by_id(customer_id)
        if not customer:
            raise ValueError(f"Customer {customer_id} not found")

        return CouponHolder(
            times_used=self.usage_repo.count_by_customer(coupon.id, customer_id),
            has_orders=self.order_repo.count_non_cancelled(customer_id, exclude_order_id) > 0,
            group_codes=frozenset(str(group.code) for group in customer.groups),
        )

    def evaluate(
        self,
        code: str,
        customer_id: UUID | None,
        order_total: Decimal,
        items: list[CartItem],
        now: datetime | None = None,
        exclude_order_id: UUID | None = None,
    ) -> tuple[CouponRule, CouponDiscount]:
        """Check a coupon against an order and compute its discount.

        Raises:
            CouponNotFoundError: If no coupon has this code.
            CouponUsageLimitExceededError: If every use has been taken.
            CouponNotApplicableError: If the customer or order does not qualify.
        """
        now = now or datetime.now(UTC)
        coupon = self.get_rule(code)

        if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
            raise CouponUsageLimitExceededError(f"Coupon '{code}' has reached its usage limit")
        if not coupon_rules.is_valid(coupon, now):
            raise CouponNotApplicableError(f"Coupon '{code}' is not active or has expired")

        holder = self.holder_for(coupon, customer_id, exclude_order_id)
        if not coupon_rules.can_be_used_by(coupon, holder, now, self.tz):
            raise CouponNotApplicableError(f"Coupon '{code}' cannot be used by this customer")
        if not coupon_rules.meets_minimum(coupon, order_total):
            raise CouponNotApplicableError(
                f"Minimum order amount of {coupon.minimum_order_amount} not met"
            )

        eligible_total = coupon_rules.eligible_subtotal(coupon, order_total, items)
        discount = coupon_rules.calculate_discount(coupon, eligible_total, items)
        if discount.discount_amount <= ZERO and not discount.free_shipping:
            raise CouponNotApplicableError(
                f"Coupon '{code}' does not apply to any item in the order"
            )
        return coupon, discount

    def validate_for_order(
        self,
        code: str,
        customer_id: UUID | None,
        order_total: Decimal,
        items: list[CartItem],
    ) -> CouponValidateResponse:
        """Dry-run ``evaluate`` and report the outcome instead of raising.

        An unknown coupon or customer still raises.
        """
        try:
            _, discount = self.evaluate(code, customer_id, order_total, items)
        except (CouponNotApplicableError, CouponUsageLimitExceededError) as exc:
            return CouponValidateResponse(valid=False, coupon_code=code, messages=[str(exc)])
        return CouponValidateResponse(valid=True, coupon_code=code, discount=discount)

    def redeem(self, data: CouponRedeemRequest) -> CouponUsage:
        """Record one use of a coupon against an order.

        The usage_count increment is a conditional UPDATE bounded by
        usage_limit and is committed in the same transaction as the usage
        row; if either fails nothing is written.

        Raises:
            CouponNotFoundError: If no coupon has this code.
            CouponAlreadyRedeemedError: If the coupon was already used on the order.
            CouponUsageLimitExceededError: If the last use has been taken.
            CouponNotApplicableError: If the customer or order does not qualify.
            ValueError: If the order is unknown or belongs to another customer.
        """
        order = self.order_repo.get_by_id(data.order_id)
        if not order or order.customer_id != data.customer_id:
            raise ValueError(f"Order {data.order_id} not found for customer {data.customer_id}")

        coupon = self.get_rule(data.coupon_code)
        if self.usage_repo.get_by_coupon_and_order(coupon.id, data.order_id):
            raise CouponAlreadyRedeemedError(
                f"Coupon '{data.coupon_code}' was already redeemed for order {data.order_id}"
            )

        _, discount = self.evaluate(
            data.coupon_code,
            data.customer_id,
            data.order_total,
            data.items,
            exclude_order_id=data.order_id,
        )
        amount = discount.discount_amount

        if not self.coupon_repo.increment_usage(coupon.id):
            self.db.rollback()
            raise CouponUsageLimitExceededError(
                f"Coupon '{data.coupon_code}' has reached its usage limit"
            )
        try:
            usage = self.usage_repo.create(
                coupon_id=coupon.id,
                customer_id=data.customer_id,
                order_id=data.order_id,
                discount_amount=amount,
                order_total_before_discount=round_money(data.order_total),
                order_total_after_discount=round_money(max(data.order_total - amount, ZERO)),
                applied_products=sorted({item.product_id for item in discount.applicable_items})
                or None,
                usage_context=data.usage_context,
            )
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise CouponAlreadyRedeemedError(
                f"Coupon '{data.coupon_code}' was already redeemed for order {data.order_id}"
            ) from exc

        self.db.refresh(usage)
        logger.info(
            "Redeemed coupon %s for order %s (discount %s)",
            data.coupon_code,
            data.order_id,
            amount,
        )
        return usage

    def to_response(self, coupon: Coupon) -> CouponResponse:
        response = CouponResponse.model_validate(coupon)
        response.formatted_value = coupon_rules.formatted_value(response, settings.CURRENCY)
        response.remaining_uses = coupon_rules.remaining_uses(response)
        return response

    def analytics(self, code: str) -> CouponAnalyticsResponse:
        coupon = self.get_rule(code)
        times_used = self.usage_repo.count_by_coupon(coupon.id)
        total = self.usage_repo.total_discount(coupon.id)
        average = round_money(total / times_used) if times_used else ZERO
        return CouponAnalyticsResponse(
            usage_count=coupon.usage_count,
            usage_limit=coupon.usage_limit,
            remaining_uses=coupon_rules.remaining_uses(coupon),
            usage_percentage=coupon_rules.usage_percentage(coupon),
            total_discount_given=round_money(total),
            average_discount=average,
        )

    def expiring_soon(self, days: int = 7) -> list[Coupon]:
        """Active coupons that expire within the next ``days`` days."""
        now = datetime.now(UTC)
        return self.coupon_repo.get_expiring_between(now, now + timedelta(days=days))
