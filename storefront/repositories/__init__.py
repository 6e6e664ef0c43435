from storefront.repositories.bundle_discount_rule_repository import BundleDiscountRuleRepository
from storefront.repositories.carrier_rate_card_repository import CarrierRateCardRepository
from storefront.repositories.carrier_service_repository import CarrierServiceRepository
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.coupon_usage_repository import CouponUsageRepository
from storefront.repositories.customer_repository import CustomerGroupRepository, CustomerRepository
from storefront.repositories.delivery_option_repository import DeliveryOptionRepository
from storefront.repositories.order_charge_repository import OrderChargeRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.shipping_insurance_repository import ShippingInsuranceRepository
from storefront.repositories.tax_configuration_repository import TaxConfigurationRepository

__all__ = [
    "BundleDiscountRuleRepository",
    "CarrierRateCardRepository",
    "CarrierServiceRepository",
    "CouponRepository",
    "CouponUsageRepository",
    "CustomerGroupRepository",
    "CustomerRepository",
    "DeliveryOptionRepository",
    "OrderChargeRepository",
    "OrderRepository",
    "ShippingInsuranceRepository",
    "TaxConfigurationRepository",
]
