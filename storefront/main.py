from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.routers import (
    bundle_discount_rules,
    carriers,
    coupons,
    customers,
    delivery_options,
    order_charges,
    orders,
    pricing,
    shipping_insurance,
    taxes,
)

OPENAPI_TAGS = [
    {"name": "Pricing", "description": "Quote orders and look up shipping, delivery and cover."},
    {"name": "Taxes", "description": "Configure tax rules applied to orders."},
    {"name": "Order Charges", "description": "Configure COD, handling and other order charges."},
    {"name": "Carriers", "description": "Manage carrier services and their rate cards."},
    {"name": "Delivery Options", "description": "Configure delivery speeds and their pricing."},
    {"name": "Shipping Insurance", "description": "Configure shipping insurance plans."},
    {"name": "Coupons", "description": "Create, validate and redeem discount coupons."},
    {"name": "Bundle Discounts", "description": "Configure multi-product bundle discounts."},
    {"name": "Customers", "description": "Customers and customer groups used for eligibility."},
    {"name": "Orders", "description": "Orders referenced by coupon redemption."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Order pricing and shipping-charge service for an e-commerce storefront. "
        "Manage taxes, order charges, carriers, delivery options, insurance, "
        "coupons and bundle discounts, and quote orders against them."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(pricing.router, prefix="/v1/pricing", tags=["Pricing"])
app.include_router(taxes.router, prefix="/v1/taxes", tags=["Taxes"])
app.include_router(order_charges.router, prefix="/v1/order_charges", tags=["Order Charges"])
app.include_router(carriers.router, prefix="/v1/carriers", tags=["Carriers"])
app.include_router(
    delivery_options.router,
    prefix="/v1/delivery_options",
    tags=["Delivery Options"],
)
app.include_router(
    shipping_insurance.router,
    prefix="/v1/shipping_insurance",
    tags=["Shipping Insurance"],
)
app.include_router(coupons.router, prefix="/v1/coupons", tags=["Coupons"])
app.include_router(
    bundle_discount_rules.router,
    prefix="/v1/bundle_discount_rules",
    tags=["Bundle Discounts"],
)
app.include_router(customers.router, prefix="/v1/customers", tags=["Customers"])
app.include_router(orders.router, prefix="/v1/orders", tags=["Orders"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
