"""Carrier service and rate card API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.carrier_rate_card import CarrierRateCard
from storefront.models.carrier_service import CarrierService
from storefront.repositories.carrier_rate_card_repository import CarrierRateCardRepository
from storefront.repositories.carrier_service_repository import CarrierServiceRepository
from storefront.schemas.carrier import (
    CarrierRateCardCreate,
    CarrierRateCardResponse,
    CarrierRateCardUpdate,
    CarrierServiceCreate,
    CarrierServiceResponse,
    CarrierServiceUpdate,
    check_effective_window,
)
from storefront.schemas.shared import merged_values
from storefront.services.shipping_rate_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=CarrierServiceResponse,
    status_code=201,
    summary="Create carrier service",
    responses={
        409: {"description": "Carrier service with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_carrier_service(
    data: CarrierServiceCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> CarrierService:
    repo = CarrierServiceRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(
            status_code=409, detail="Carrier service with this code already exists"
        )
    service = repo.create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return service


@router.get(
    "/",
    response_model=list[CarrierServiceResponse],
    summary="List carrier services",
)
async def list_carrier_services(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CarrierService]:
    repo = CarrierServiceRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{code}",
    response_model=CarrierServiceResponse,
    summary="Get carrier service",
    responses={404: {"description": "Carrier service not found"}},
)
async def get_carrier_service(code: str, db: Session = Depends(get_db)) -> CarrierService:
    service = CarrierServiceRepository(db).get_by_code(code)
    if not service:
        raise HTTPException(status_code=404, detail="Carrier service not found")
    return service


@router.put(
    "/{code}",
    response_model=CarrierServiceResponse,
    summary="Update carrier service",
    responses={
        404: {"description": "Carrier service not found"},
        422: {"description": "Validation error"},
    },
)
async def update_carrier_service(
    code: str,
    data: CarrierServiceUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> CarrierService:
    service = CarrierServiceRepository(db).update(code, data)
    if not service:
        raise HTTPException(status_code=404, detail="Carrier service not found")
    cache.invalidate_prefix(CACHE_PREFIX)
    return service


@router.delete(
    "/{code}",
    status_code=204,
    summary="Delete carrier service",
    responses={404: {"description": "Carrier service not found"}},
)
async def delete_carrier_service(
    code: str,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    """Delete a carrier service and its rate cards."""
    if not CarrierServiceRepository(db).delete(code):
        raise HTTPException(status_code=404, detail="Carrier service not found")
    cache.invalidate_prefix(CACHE_PREFIX)


@router.post(
    "/{code}/rate_cards",
    response_model=CarrierRateCardResponse,
    status_code=201,
    summary="Create rate card",
    responses={
        404: {"description": "Carrier service not found"},
        422: {"description": "Validation error"},
    },
)
async def create_rate_card(
    code: str,
    data: CarrierRateCardCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> CarrierRateCard:
    service = CarrierServiceRepository(db).get_by_code(code)
    if not service:
        raise HTTPException(status_code=404, detail="Carrier service not found")
    card = CarrierRateCardRepository(db).create(UUID(str(service.id)), data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return card


@router.get(
    "/{code}/rate_cards",
    response_model=list[CarrierRateCardResponse],
    summary="List rate cards",
    responses={404: {"description": "Carrier service not found"}},
)
async def list_rate_cards(code: str, db: Session = Depends(get_db)) -> list[CarrierRateCard]:
    service = CarrierServiceRepository(db).get_by_code(code)
    if not service:
        raise HTTPException(status_code=404, detail="Carrier service not found")
    return CarrierRateCardRepository(db).get_by_service_id(UUID(str(service.id)))


@router.put(
    "/rate_cards/{rate_card_id}",
    response_model=CarrierRateCardResponse,
    summary="Update rate card",
    responses={
        404: {"description": "Rate card not found"},
        422: {"description": "Validation error"},
    },
)
async def update_rate_card(
    rate_card_id: UUID,
    data: CarrierRateCardUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> CarrierRateCard:
    repo = CarrierRateCardRepository(db)
    card = repo.get_by_id(rate_card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Rate card not found")
    merged = merged_values(card, data, {"effective_from", "effective_to"})
    try:
        check_effective_window(merged["effective_from"], merged["effective_to"])
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    card = repo.update(rate_card_id, data)  # type: ignore[assignment]
    cache.invalidate_prefix(CACHE_PREFIX)
    return card


@router.delete(
    "/rate_cards/{rate_card_id}",
    status_code=204,
    summary="Delete rate card",
    responses={404: {"description": "Rate card not found"}},
)
async def delete_rate_card(
    rate_card_id: UUID,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not CarrierRateCardRepository(db).delete(rate_card_id):
        raise HTTPException(status_code=404, detail="Rate card not found")
    cache.invalidate_prefix(CACHE_PREFIX)
