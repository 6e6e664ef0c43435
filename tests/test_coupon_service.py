"""Tests for CouponService validation and redemption."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from storefront.core.database import get_db
from storefront.models.coupon import CouponType
from storefront.models.order import OrderStatus
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.coupon_usage_repository import CouponUsageRepository
from storefront.repositories.customer_repository import CustomerGroupRepository, CustomerRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.coupon import CouponCreate, CouponRedeemRequest
from storefront.schemas.customer import CustomerCreate, CustomerGroupCreate, OrderCreate
from storefront.schemas.pricing import CartItem
from storefront.services.coupon_service import (
    CouponAlreadyRedeemedError,
    CouponNotApplicableError,
    CouponNotFoundError,
    CouponService,
    CouponUsageLimitExceededError,
)


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
def customer(db_session):
    """Create a test customer."""
    return CustomerRepository(db_session).create(
        CustomerCreate(external_id=f"cust_{uuid4()}", name="Coupon Test Customer")
    )


def _order(db_session, customer, status: OrderStatus = OrderStatus.PENDING):
    return OrderRepository(db_session).create(
        OrderCreate(
            customer_id=customer.id,
            order_number=f"ORD-{uuid4().hex[:10]}",
            status=status,
            total=Decimal("1000"),
        )
    )


@pytest.fixture
def order(db_session, customer):
    """Create a pending order for the test customer."""
    return _order(db_session, customer)


def _coupon(db_session, code: str = "SAVE10", **overrides):
    values = {
        "code": code,
        "name": code,
        "type": CouponType.PERCENTAGE,
        "value": Decimal("10"),
        "starts_at": datetime.now(UTC) - timedelta(days=1),
    }
    values.update(overrides)
    return CouponRepository(db_session).create(CouponCreate(**values))


def _redeem(coupon_code, customer, order, order_total: str = "1000"):
    return CouponRedeemRequest(
        coupon_code=coupon_code,
        customer_id=customer.id,
        order_id=order.id,
        order_total=Decimal(order_total),
    )


class TestEvaluate:
    def test_percentage_discount(self, db_session, customer):
        _coupon(db_session)
        coupon, discount = CouponService(db_session).evaluate(
            "SAVE10", customer.id, Decimal("1000"), []
        )
        assert coupon.code == "SAVE10"
        assert discount.discount_amount == Decimal("100.00")

    def test_only_eligible_items_are_discounted(self, db_session):
        _coupon(db_session, applicable_categories=[1])
        items = [
            CartItem(product_id=1, category_id=1, price=Decimal("300")),
            CartItem(product_id=2, category_id=2, price=Decimal("700")),
        ]
        _, discount = CouponService(db_session).evaluate("SAVE10", None, Decimal("1000"), items)
        assert discount.discount_amount == Decimal("30.00")

    def test_unknown_code(self, db_session):
        with pytest.raises(CouponNotFoundError):
            CouponService(db_session).evaluate("MISSING", None, Decimal("100"), [])

    def test_unknown_customer(self, db_session):
        _coupon(db_session)
        with pytest.raises(ValueError, match="not found"):
            CouponService(db_session).evaluate("SAVE10", uuid4(), Decimal("100"), [])

    def test_minimum_order_amount(self, db_session):
        _coupon(db_session, minimum_order_amount=Decimal("500"))
        with pytest.raises(CouponNotApplicableError, match="Minimum order amount"):
            CouponService(db_session).evaluate("SAVE10", None, Decimal("499"), [])

    def test_expired(self, db_session):
        now = datetime.now(UTC)
        _coupon(
            db_session,
            starts_at=now - timedelta(days=10),
            expires_at=now - timedelta(days=1),
        )
        with pytest.raises(CouponNotApplicableError, match="expired"):
            CouponService(db_session).evaluate("SAVE10", None, Decimal("100"), [])

    def test_nothing_to_discount(self, db_session):
        _coupon(db_session, applicable_products=[42])
        items = [CartItem(product_id=1, price=Decimal("100"))]
        with pytest.raises(CouponNotApplicableError, match="does not apply"):
            CouponService(db_session).evaluate("SAVE10", None, Decimal("100"), items)

    def test_customer_group_restriction(self, db_session):
        vip = CustomerGroupRepository(db_session).create(
            CustomerGroupCreate(code="vip", name="VIP")
        )
        member = CustomerRepository(db_session).create(
            CustomerCreate(external_id="vip_1", name="VIP Customer"), [vip]
        )
        outsider = CustomerRepository(db_session).create(
            CustomerCreate(external_id="plain_1", name="Plain Customer")
        )
        _coupon(db_session, applicable_customer_groups=["vip"])
        service = CouponService(db_session)

        service.evaluate("SAVE10", member.id, Decimal("100"), [])
        with pytest.raises(CouponNotApplicableError):
            service.evaluate("SAVE10", outsider.id, Decimal("100"), [])

    def test_validate_reports_instead_of_raising(self, db_session):
        _coupon(db_session, minimum_order_amount=Decimal("500"))
        service = CouponService(db_session)

        refused = service.validate_for_order("SAVE10", None, Decimal("100"), [])
        accepted = service.validate_for_order("SAVE10", None, Decimal("600"), [])

        assert not refused.valid
        assert refused.messages
        assert refused.discount is None
        assert accepted.valid
        assert accepted.discount is not None
        assert accepted.discount.discount_amount == Decimal("60.00")


class TestRedeem:
    def test_records_usage_and_increments_count(self, db_session, customer, order):
        _coupon(db_session)
        usage = CouponService(db_session).redeem(_redeem("SAVE10", customer, order))

        assert usage.discount_amount == Decimal("100.00")
        assert usage.order_total_before_discount == Decimal("1000.00")
        assert usage.order_total_after_discount == Decimal("900.00")
        coupon = CouponRepository(db_session).get_by_code("SAVE10")
        assert coupon.usage_count == 1

    def test_same_order_twice(self, db_session, customer, order):
        _coupon(db_session)
        service = CouponService(db_session)
        service.redeem(_redeem("SAVE10", customer, order))

        with pytest.raises(CouponAlreadyRedeemedError):
            service.redeem(_redeem("SAVE10", customer, order))
        assert CouponRepository(db_session).get_by_code("SAVE10").usage_count == 1

    def test_usage_limit_exhausted(self, db_session, customer, order):
        _coupon(db_session, usage_limit=1)
        other_customer = CustomerRepository(db_session).create(
            CustomerCreate(external_id="second", name="Second Customer")
        )
        other_order = _order(db_session, other_customer)
        service = CouponService(db_session)
        service.redeem(_redeem("SAVE10", customer, order))

        with pytest.raises(CouponUsageLimitExceededError):
            service.redeem(_redeem("SAVE10", other_customer, other_order))
        coupon = CouponRepository(db_session).get_by_code("SAVE10")
        assert coupon.usage_count == 1
        assert CouponUsageRepository(db_session).count_by_coupon(coupon.id) == 1

    def test_conditional_increment_stops_at_limit(self, db_session):
        coupon = _coupon(db_session, usage_limit=2)
        repo = CouponRepository(db_session)
        assert repo.increment_usage(coupon.id)
        assert repo.increment_usage(coupon.id)
        assert not repo.increment_usage(coupon.id)
        db_session.commit()
        assert repo.get_by_code("SAVE10").usage_count == 2

    def test_per_customer_limit(self, db_session, customer, order):
        _coupon(db_session, usage_limit_per_customer=1)
        second_order = _order(db_session, customer)
        service = CouponService(db_session)
        service.redeem(_redeem("SAVE10", customer, order))

        with pytest.raises(CouponNotApplicableError):
            service.redeem(_redeem("SAVE10", customer, second_order))

    def test_first_order_only_ignores_the_order_being_redeemed(
        self, db_session, customer, order
    ):
        _coupon(db_session, first_order_only=True)
        usage = CouponService(db_session).redeem(_redeem("SAVE10", customer, order))
        assert usage.order_id == order.id

    def test_first_order_only_rejects_returning_customer(self, db_session, customer):
        _coupon(db_session, first_order_only=True)
        _order(db_session, customer, OrderStatus.DELIVERED)
        new_order = _order(db_session, customer)

        with pytest.raises(CouponNotApplicableError):
            CouponService(db_session).redeem(_redeem("SAVE10", customer, new_order))

    def test_cancelled_orders_do_not_count(self, db_session, customer):
        _coupon(db_session, first_order_only=True)
        _order(db_session, customer, OrderStatus.CANCELLED)
        new_order = _order(db_session, customer)
        CouponService(db_session).redeem(_redeem("SAVE10", customer, new_order))

    def test_order_of_another_customer(self, db_session, customer, order):
        _coupon(db_session)
        stranger = CustomerRepository(db_session).create(
            CustomerCreate(external_id="stranger", name="Stranger")
        )
        with pytest.raises(ValueError, match="not found for customer"):
            CouponService(db_session).redeem(_redeem("SAVE10", stranger, order))


class TestAnalytics:
    def test_usage_totals(self, db_session, customer):
        _coupon(db_session, usage_limit=4)
        service = CouponService(db_session)
        service.redeem(_redeem("SAVE10", customer, _order(db_session, customer), "1000"))
        service.redeem(_redeem("SAVE10", customer, _order(db_session, customer), "500"))

        analytics = service.analytics("SAVE10")

        assert analytics.usage_count == 2
        assert analytics.remaining_uses == 2
        assert analytics.usage_percentage == Decimal("50.00")
        assert analytics.total_discount_given == Decimal("150.00")
        assert analytics.average_discount == Decimal("75.00")

    def test_expiring_soon(self, db_session):
        now = datetime.now(UTC)
        _coupon(db_session, "SOON", expires_at=now + timedelta(days=2))
        _coupon(db_session, "LATER", expires_at=now + timedelta(days=30))
        _coupon(db_session, "NEVER")

        codes = [c.code for c in CouponService(db_session).expiring_soon(7)]

        assert codes == ["SOON"]

    def test_response_fields(self, db_session):
        coupon = _coupon(db_session, usage_limit=10, type=CouponType.FIXED_AMOUNT, value=500)
        response = CouponService(db_session).to_response(coupon)
        assert response.formatted_value == "₹500.00"
        assert response.remaining_uses == 10
