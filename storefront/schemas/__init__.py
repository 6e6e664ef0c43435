from storefront.schemas.bundle_discount_rule import (
    BundleDiscountRuleCreate,
    BundleDiscountRuleResponse,
    BundleDiscountRuleUpdate,
    BundleRule,
)
from storefront.schemas.carrier import (
    CarrierRateCardCreate,
    CarrierRateCardResponse,
    CarrierRateCardUpdate,
    CarrierServiceCreate,
    CarrierServiceResponse,
    CarrierServiceUpdate,
    RateBreakdown,
    RateCard,
    ShipmentOptions,
    ShippingQuote,
)
from storefront.schemas.coupon import (
    CouponAnalyticsResponse,
    CouponCreate,
    CouponDiscount,
    CouponResponse,
    CouponRule,
    CouponUpdate,
    CouponUsageResponse,
)
from storefront.schemas.customer import (
    CustomerCreate,
    CustomerGroupCreate,
    CustomerGroupResponse,
    CustomerResponse,
    OrderCreate,
    OrderResponse,
)
from storefront.schemas.delivery_option import (
    DeliveryContext,
    DeliveryOptionCreate,
    DeliveryOptionQuote,
    DeliveryOptionResponse,
    DeliveryOptionRule,
    DeliveryOptionUpdate,
)
from storefront.schemas.order_charge import (
    OrderChargeCreate,
    OrderChargeResponse,
    OrderChargeRule,
    OrderChargeUpdate,
)
from storefront.schemas.pricing import (
    CartItem,
    ChargesSummary,
    OrderContext,
    QuoteRequest,
    QuoteResponse,
    TaxSummary,
)
from storefront.schemas.shipping_insurance import (
    InsuranceContext,
    InsurancePlan,
    InsuranceQuote,
    ShippingInsuranceCreate,
    ShippingInsuranceResponse,
    ShippingInsuranceUpdate,
)
from storefront.schemas.tax_configuration import (
    TaxConfigurationCreate,
    TaxConfigurationResponse,
    TaxConfigurationUpdate,
    TaxRule,
)

__all__ = [
    "BundleDiscountRuleCreate",
    "BundleDiscountRuleResponse",
    "BundleDiscountRuleUpdate",
    "BundleRule",
    "CarrierRateCardCreate",
    "CarrierRateCardResponse",
    "CarrierRateCardUpdate",
    "CarrierServiceCreate",
    "CarrierServiceResponse",
    "CarrierServiceUpdate",
    "CartItem",
    "ChargesSummary",
    "CouponAnalyticsResponse",
    "CouponCreate",
    "CouponDiscount",
    "CouponResponse",
    "CouponRule",
    "CouponUpdate",
    "CouponUsageResponse",
    "CustomerCreate",
    "CustomerGroupCreate",
    "CustomerGroupResponse",
    "CustomerResponse",
    "DeliveryContext",
    "DeliveryOptionCreate",
    "DeliveryOptionQuote",
    "DeliveryOptionResponse",
    "DeliveryOptionRule",
    "DeliveryOptionUpdate",
    "InsuranceContext",
    "InsurancePlan",
    "InsuranceQuote",
    "OrderChargeCreate",
    "OrderChargeResponse",
    "OrderChargeRule",
    "OrderChargeUpdate",
    "OrderContext",
    "OrderCreate",
    "OrderResponse",
    "QuoteRequest",
    "QuoteResponse",
    "RateBreakdown",
    "RateCard",
    "ShipmentOptions",
    "ShippingInsuranceCreate",
    "ShippingInsuranceResponse",
    "ShippingInsuranceUpdate",
    "ShippingQuote",
    "TaxConfigurationCreate",
    "TaxConfigurationResponse",
    "TaxConfigurationUpdate",
    "TaxRule",
    "TaxSummary",
]
