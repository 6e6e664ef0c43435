"""Pricing API endpoints: full order quotes and the per-stage lookups."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.schemas.carrier import ShippingQuote, ShippingRateRequest
from storefront.schemas.delivery_option import DeliveryOptionQuote, DeliveryOptionsRequest
from storefront.schemas.pricing import QuoteRequest, QuoteResponse
from storefront.schemas.shipping_insurance import InsuranceOptionsRequest, InsuranceOptionsResponse
from storefront.services.delivery_option_service import DeliveryOptionService
from storefront.services.pricing_service import PricingService
from storefront.services.shipping_insurance_service import ShippingInsuranceService
from storefront.services.shipping_rate_service import ShippingRateService

router = APIRouter()


@router.post(
    "/quote",
    response_model=QuoteResponse,
    summary="Quote an order",
    responses={
        404: {"description": "Customer not found"},
        422: {"description": "Validation error"},
    },
)
async def quote_order(
    data: QuoteRequest,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> QuoteResponse:
    """Price a cart: discounts, shipping, delivery, insurance, charges and tax."""
    try:
        return PricingService(db, cache).quote(data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.post(
    "/shipping_rates",
    response_model=list[ShippingQuote],
    summary="Quote shipping rates",
    responses={404: {"description": "Carrier service not found"}},
)
async def quote_shipping_rates(
    data: ShippingRateRequest,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> list[ShippingQuote]:
    """Quotes from every carrier serving the zone, or only the requested one."""
    service = ShippingRateService(db, cache)
    if data.carrier_service_code is None:
        return service.quote_rates(data.zone, data.weight, data.options, data.ship_date)
    try:
        quote = service.get_quote(
            data.zone, data.weight, data.options, data.carrier_service_code, data.ship_date
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return [quote] if quote else []


@router.post(
    "/delivery_options",
    response_model=list[DeliveryOptionQuote],
    summary="List available delivery options",
)
async def quote_delivery_options(
    data: DeliveryOptionsRequest,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> list[DeliveryOptionQuote]:
    return DeliveryOptionService(db, cache).available_options(
        data.zone, data.order_value, data.base_shipping_cost, data.context
    )


@router.post(
    "/insurance_options",
    response_model=InsuranceOptionsResponse,
    summary="List insurance options",
)
async def quote_insurance_options(
    data: InsuranceOptionsRequest,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> InsuranceOptionsResponse:
    return ShippingInsuranceService(db, cache).get_options(data.order_value, data.context)
