from storefront.models.bundle_discount_rule import BundleDiscountRule, BundleDiscountType
from storefront.models.carrier_rate_card import CarrierRateCard
from storefront.models.carrier_service import CarrierService, ServiceTier
from storefront.models.coupon import Coupon, CouponType
from storefront.models.coupon_usage import CouponUsage
from storefront.models.customer import Customer, CustomerGroup, customer_group_members
from storefront.models.delivery_option import DeliveryOption
from storefront.models.order import Order, OrderStatus
from storefront.models.order_charge import ChargeApplyTo, OrderCharge, OrderChargeType
from storefront.models.shipping_insurance import ShippingInsurance
from storefront.models.tax_configuration import TaxApplyOn, TaxConfiguration, TaxType

__all__ = [
    "BundleDiscountRule",
    "BundleDiscountType",
    "CarrierRateCard",
    "CarrierService",
    "ChargeApplyTo",
    "Coupon",
    "CouponType",
    "CouponUsage",
    "Customer",
    "CustomerGroup",
    "DeliveryOption",
    "Order",
    "OrderCharge",
    "OrderChargeType",
    "OrderStatus",
    "ServiceTier",
    "ShippingInsurance",
    "TaxApplyOn",
    "TaxConfiguration",
    "TaxType",
    "customer_group_members",
]
