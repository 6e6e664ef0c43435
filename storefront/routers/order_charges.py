"""Order charge API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.order_charge import OrderCharge
from storefront.repositories.order_charge_repository import OrderChargeRepository
from storefront.schemas.order_charge import (
    OrderChargeCreate,
    OrderChargeResponse,
    OrderChargeUpdate,
)
from storefront.services.order_charge_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=OrderChargeResponse,
    status_code=201,
    summary="Create order charge",
    responses={
        409: {"description": "Order charge with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_order_charge(
    data: OrderChargeCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> OrderCharge:
    """Create a new order charge."""
    repo = OrderChargeRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(
            status_code=409, detail="Order charge with this code already exists"
        )
    charge = repo.create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return charge


@router.get(
    "/",
    response_model=list[OrderChargeResponse],
    summary="List order charges",
)
async def list_order_charges(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[OrderCharge]:
    repo = OrderChargeRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{code}",
    response_model=OrderChargeResponse,
    summary="Get order charge",
    responses={404: {"description": "Order charge not found"}},
)
async def get_order_charge(code: str, db: Session = Depends(get_db)) -> OrderCharge:
    charge = OrderChargeRepository(db).get_by_code(code)
    if not charge:
        raise HTTPException(status_code=404, detail="Order charge not found")
    return charge


@router.put(
    "/{code}",
    response_model=OrderChargeResponse,
    summary="Update order charge",
    responses={
        404: {"description": "Order charge not found"},
        422: {"description": "Validation error"},
    },
)
async def update_order_charge(
    code: str,
    data: OrderChargeUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> OrderCharge:
    charge = OrderChargeRepository(db).update(code, data)
    if not charge:
        raise HTTPException(status_code=404, detail="Order charge not found")
    cache.invalidate_prefix(CACHE_PREFIX)
    return charge


@router.delete(
    "/{code}",
    status_code=204,
    summary="Delete order charge",
    responses={404: {"description": "Order charge not found"}},
)
async def delete_order_charge(
    code: str,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not OrderChargeRepository(db).delete(code):
        raise HTTPException(status_code=404, detail="Order charge not found")
    cache.invalidate_prefix(CACHE_PREFIX)
