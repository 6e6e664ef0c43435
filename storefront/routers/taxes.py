"""Tax configuration API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.cache import ConfigCache, get_config_cache
from storefront.core.database import get_db
from storefront.models.tax_configuration import TaxConfiguration
from storefront.repositories.tax_configuration_repository import TaxConfigurationRepository
from storefront.schemas.shared import merged_values
from storefront.schemas.tax_configuration import (
    TaxConfigurationCreate,
    TaxConfigurationResponse,
    TaxConfigurationUpdate,
    check_inclusive_rate,
)
from storefront.services.tax_service import CACHE_PREFIX

router = APIRouter()


@router.post(
    "/",
    response_model=TaxConfigurationResponse,
    status_code=201,
    summary="Create tax configuration",
    responses={
        409: {"description": "Tax with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_tax(
    data: TaxConfigurationCreate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> TaxConfiguration:
    """Create a new tax configuration."""
    repo = TaxConfigurationRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(status_code=409, detail="Tax with this code already exists")
    tax = repo.create(data)
    cache.invalidate_prefix(CACHE_PREFIX)
    return tax


@router.get(
    "/",
    response_model=list[TaxConfigurationResponse],
    summary="List tax configurations",
)
async def list_taxes(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[TaxConfiguration]:
    """List all tax configurations."""
    repo = TaxConfigurationRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{code}",
    response_model=TaxConfigurationResponse,
    summary="Get tax configuration",
    responses={404: {"description": "Tax not found"}},
)
async def get_tax(code: str, db: Session = Depends(get_db)) -> TaxConfiguration:
    tax = TaxConfigurationRepository(db).get_by_code(code)
    if not tax:
        raise HTTPException(status_code=404, detail="Tax not found")
    return tax


@router.put(
    "/{code}",
    response_model=TaxConfigurationResponse,
    summary="Update tax configuration",
    responses={
        404: {"description": "Tax not found"},
        422: {"description": "Validation error"},
    },
)
async def update_tax(
    code: str,
    data: TaxConfigurationUpdate,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> TaxConfiguration:
    repo = TaxConfigurationRepository(db)
    tax = repo.get_by_code(code)
    if not tax:
        raise HTTPException(status_code=404, detail="Tax not found")
    merged = merged_values(tax, data, {"is_inclusive", "rate"})
    try:
        check_inclusive_rate(merged["is_inclusive"], merged["rate"])
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    tax = repo.update(code, data)  # type: ignore[assignment]
    cache.invalidate_prefix(CACHE_PREFIX)
    return tax


@router.delete(
    "/{code}",
    status_code=204,
    summary="Delete tax configuration",
    responses={404: {"description": "Tax not found"}},
)
async def delete_tax(
    code: str,
    db: Session = Depends(get_db),
    cache: ConfigCache = Depends(get_config_cache),
) -> None:
    if not TaxConfigurationRepository(db).delete(code):
        raise HTTPException(status_code=404, detail="Tax not found")
    cache.invalidate_prefix(CACHE_PREFIX)
