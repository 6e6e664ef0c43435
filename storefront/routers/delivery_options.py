"""Delivery option API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.delivery_option import DeliveryOption
from storefront.repositories.delivery_option_repository import DeliveryOptionRepository
from storefront.schemas.delivery_option import (
    DeliveryOptionCreate,
    DeliveryOptionResponse,
    DeliveryOptionUpdate,
)
from storefront.services.delivery_option_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=DeliveryOptionResponse,
    status_code=201,
    summary="Create delivery option",
    responses={
        409: {"description": "Delivery option with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_delivery_option(
    data: DeliveryOptionCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> DeliveryOption:
    repo = DeliveryOptionRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(
            status_code=409, detail="Delivery option with this code already exists"
        )
    option = repo.create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return option


@router.get(
    "/",
    response_model=list[DeliveryOptionResponse],
    summary="List delivery options",
)
async def list_delivery_options(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[DeliveryOption]:
    """List delivery options, by sort order unless ``order_by`` is given."""
    repo = DeliveryOptionRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{code}",
    response_model=DeliveryOptionResponse,
    summary="Get delivery option",
    responses={404: {"description": "Delivery option not found"}},
)
async def get_delivery_option(code: str, db: Session = Depends(get_db)) -> DeliveryOption:
    option = DeliveryOptionRepository(db).get_by_code(code)
    if not option:
        raise HTTPException(status_code=404, detail="Delivery option not found")
    return option


@router.put(
    "/{code}",
    response_model=DeliveryOptionResponse,
    summary="Update delivery option",
    responses={
        404: {"description": "Delivery option not found"},
        422: {"description": "Validation error"},
    },
)
async def update_delivery_option(
    code: str,
    data: DeliveryOptionUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> DeliveryOption:
    option = DeliveryOptionRepository(db).update(code, data)
    if not option:
        raise HTTPException(status_code=404, detail="Delivery option not found")
    cache.invalidate_prefix(CACHE_PREFIX)
    return option


@router.delete(
    "/{code}",
    status_code=204,
    summary="Delete delivery option",
    responses={404: {"description": "Delivery option not found"}},
)
async def delete_delivery_option(
    code: str,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not DeliveryOptionRepository(db).delete(code):
        raise HTTPException(status_code=404, detail="Delivery option not found")
    cache.invalidate_prefix(CACHE_PREFIX)
