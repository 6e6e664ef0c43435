"""Shipping insurance plan API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.shipping_insurance import ShippingInsurance
from storefront.repositories.shipping_insurance_repository import ShippingInsuranceRepository
from storefront.schemas.shipping_insurance import (
    ShippingInsuranceCreate,
    ShippingInsuranceResponse,
    ShippingInsuranceUpdate,
)
from storefront.services.shipping_insurance_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=ShippingInsuranceResponse,
    status_code=201,
    summary="Create insurance plan",
    responses={422: {"description": "Validation error"}},
)
async def create_insurance_plan(
    data: ShippingInsuranceCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> ShippingInsurance:
    plan = ShippingInsuranceRepository(db).create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return plan


@router.get(
    "/",
    response_model=list[ShippingInsuranceResponse],
    summary="List insurance plans",
)
async def list_insurance_plans(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[ShippingInsurance]:
    repo = ShippingInsuranceRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{plan_id}",
    response_model=ShippingInsuranceResponse,
    summary="Get insurance plan",
    responses={404: {"description": "Insurance plan not found"}},
)
async def get_insurance_plan(plan_id: UUID, db: Session = Depends(get_db)) -> ShippingInsurance:
    plan = ShippingInsuranceRepository(db).get_by_id(plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Insurance plan not found")
    return plan


@router.put(
    "/{plan_id}",
    response_model=ShippingInsuranceResponse,
    summary="Update insurance plan",
    responses={
        404: {"description": "Insurance plan not found"},
        422: {"description": "Validation error"},
    },
)
async def update_insurance_plan(
    plan_id: UUID,
    data: ShippingInsuranceUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> ShippingInsurance:
    plan = ShippingInsuranceRepository(db).update(plan_id, data)
    if not plan:
        raise HTTPException(status_code=404, detail="Insurance plan not found")
    cache.invalidate_prefix(CACHE_PREFIX)
    return plan


@router.delete(
    "/{plan_id}",
    status_code=204,
    summary="Delete insurance plan",
    responses={404: {"description": "Insurance plan not found"}},
)
async def delete_insurance_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not ShippingInsuranceRepository(db).delete(plan_id):
        raise HTTPException(status_code=404, detail="Insurance plan not found")
    cache.invalidate_prefix(CACHE_PREFIX)
