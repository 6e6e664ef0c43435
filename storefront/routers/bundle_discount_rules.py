"""Bundle discount rule API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.bundle_discount_rule import BundleDiscountRule
from storefront.repositories.bundle_discount_rule_repository import (
    BundleDiscountRuleRepository,
)
from storefront.schemas.bundle_discount_rule import (
    BundleDiscountRuleCreate,
    BundleDiscountRuleResponse,
    BundleDiscountRuleUpdate,
)
from storefront.services.bundle_discount_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=BundleDiscountRuleResponse,
    status_code=201,
    summary="Create bundle discount rule",
    responses={422: {"description": "Validation error"}},
)
async def create_bundle_rule(
    data: BundleDiscountRuleCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> BundleDiscountRule:
    rule = BundleDiscountRuleRepository(db).create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return rule


@router.get(
    "/",
    response_model=list[BundleDiscountRuleResponse],
    summary="List bundle discount rules",
)
async def list_bundle_rules(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[BundleDiscountRule]:
    repo = BundleDiscountRuleRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{rule_id}",
    response_model=BundleDiscountRuleResponse,
    summary="Get bundle discount rule",
    responses={404: {"description": "Bundle discount rule not found"}},
)
async def get_bundle_rule(rule_id: UUID, db: Session = Depends(get_db)) -> BundleDiscountRule:
    rule = BundleDiscountRuleRepository(db).get_by_id(rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Bundle discount rule not found")
    return rule


@router.put(
    "/{rule_id}",
    response_model=BundleDiscountRuleResponse,
    summary="Update bundle discount rule",
    responses={
        404: {"description": "Bundle discount rule not found"},
        422: {"description": "Validation error"},
    },
)
async def update_bundle_rule(
    rule_id: UUID,
    data: BundleDiscountRuleUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> BundleDiscountRule:
    rule = BundleDiscountRuleRepository(db).update(rule_id, data)
    if not rule:
        raise HTTPException(status_code=404, detail="Bundle discount rule not found")
    cache.invalidate_prefix(CACHE_PREFIX)
    return rule


@router.delete(
    "/{rule_id}",
    status_code=204,
    summary="Delete bundle discount rule",
    responses={404: {"description": "Bundle discount rule not found"}},
)
async def delete_bundle_rule(
    rule_id: UUID,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not BundleDiscountRuleRepository(db).delete(rule_id):
        raise HTTPException(status_code=404, detail="Bundle discount rule not found")
    cache.invalidate_prefix(CACHE_PREFIX)
