"""Coupon API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.database import get_db
from storefront.models.coupon_usage import CouponUsage
from storefront.repositories.coupon_repository import CouponRepository
from storefront.repositories.coupon_usage_repository import CouponUsageRepository
from storefront.schemas.coupon import (
    COUPON_TERM_FIELDS,
    CouponAnalyticsResponse,
    CouponCreate,
    CouponRedeemRequest,
    CouponResponse,
    CouponUpdate,
    CouponUsageResponse,
    CouponValidateRequest,
    CouponValidateResponse,
    check_coupon_terms,
)
from storefront.schemas.shared import merged_values
from storefront.services.coupon_service import (
    CouponAlreadyRedeemedError,
    CouponNotApplicableError,
    CouponNotFoundError,
    CouponService,
    CouponUsageLimitExceededError,
)

router = APIRouter()


@router.post(
    "/",
    response_model=CouponResponse,
    status_code=201,
    summary="Create coupon",
    responses={
        409: {"description": "Coupon with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_coupon(data: CouponCreate, db: Session = Depends(get_db)) -> CouponResponse:
    """Create a new coupon."""
    repo = CouponRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(status_code=409, detail="Coupon with this code already exists")
    return CouponService(db).to_response(repo.create(data))


@router.get(
    "/",
    response_model=list[CouponResponse],
    summary="List coupons",
)
async def list_coupons(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    is_active: bool | None = None,
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CouponResponse]:
    """List coupons, optionally only active or inactive ones."""
    repo = CouponRepository(db)
    service = CouponService(db)
    response.headers["X-Total-Count"] = str(repo.count(is_active=is_active))
    coupons = repo.get_all(skip=skip, limit=limit, is_active=is_active, order_by=order_by)
    return [service.to_response(c) for c in coupons]


@router.get(
    "/expiring",
    response_model=list[CouponResponse],
    summary="List coupons expiring soon",
)
async def list_expiring_coupons(
    days: int = Query(default=7, ge=1, le=365),
    db: Session = Depends(get_db),
) -> list[CouponResponse]:
    service = CouponService(db)
    return [service.to_response(c) for c in service.expiring_soon(days)]


@router.post(
    "/validate",
    response_model=CouponValidateResponse,
    summary="Validate coupon for an order",
    responses={404: {"description": "Coupon or customer not found"}},
)
async def validate_coupon(
    data: CouponValidateRequest,
    db: Session = Depends(get_db),
) -> CouponValidateResponse:
    """Check whether a coupon applies to an order and preview its discount."""
    try:
        return CouponService(db).validate_for_order(
            data.coupon_code, data.customer_id, data.order_total, data.items
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.post(
    "/redeem",
    response_model=CouponUsageResponse,
    status_code=201,
    summary="Redeem coupon",
    responses={
        400: {"description": "Coupon cannot be used for this order"},
        404: {"description": "Coupon, customer or order not found"},
        409: {"description": "Usage limit reached or coupon already redeemed"},
    },
)
async def redeem_coupon(
    data: CouponRedeemRequest,
    db: Session = Depends(get_db),
) -> CouponUsage:
    """Record the use of a coupon on a placed order."""
    try:
        return CouponService(db).redeem(data)
    except (CouponUsageLimitExceededError, CouponAlreadyRedeemedError) as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    except CouponNotApplicableError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


@router.get(
    "/{code}",
    response_model=CouponResponse,
    summary="Get coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon(code: str, db: Session = Depends(get_db)) -> CouponResponse:
    coupon = CouponRepository(db).get_by_code(code)
    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")
    return CouponService(db).to_response(coupon)


@router.put(
    "/{code}",
    response_model=CouponResponse,
    summary="Update coupon",
    responses={
        400: {"description": "Usage limit below current usage"},
        404: {"description": "Coupon not found"},
        422: {"description": "Validation error"},
    },
)
async def update_coupon(
    code: str,
    data: CouponUpdate,
    db: Session = Depends(get_db),
) -> CouponResponse:
    repo = CouponRepository(db)
    coupon = repo.get_by_code(code)
    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")
    if data.usage_limit is not None and data.usage_limit < coupon.usage_count:
        raise HTTPException(
            status_code=400,
            detail=f"usage_limit cannot be below the current usage count ({coupon.usage_count})",
        )
    try:
        check_coupon_terms(merged_values(coupon, data, COUPON_TERM_FIELDS))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    updated = repo.update(code, data)
    return CouponService(db).to_response(updated)  # type: ignore[arg-type]


@router.delete(
    "/{code}",
    status_code=204,
    summary="Delete coupon",
    responses={
        404: {"description": "Coupon not found"},
        409: {"description": "Coupon has been redeemed"},
    },
)
async def delete_coupon(code: str, db: Session = Depends(get_db)) -> None:
    """Delete a coupon that has never been redeemed."""
    repo = CouponRepository(db)
    coupon = repo.get_by_code(code)
    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")
    if CouponUsageRepository(db).count_by_coupon(coupon.id):  # type: ignore[arg-type]
        raise HTTPException(
            status_code=409, detail="Coupon has been redeemed; deactivate it instead"
        )
    repo.delete(code)


@router.get(
    "/{code}/usages",
    response_model=list[CouponUsageResponse],
    summary="List coupon usages",
    responses={404: {"description": "Coupon not found"}},
)
async def list_coupon_usages(
    code: str,
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[CouponUsage]:
    coupon = CouponRepository(db).get_by_code(code)
    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")
    repo = CouponUsageRepository(db)
    total = repo.count_by_coupon(coupon.id)  # type: ignore[arg-type]
    response.headers["X-Total-Count"] = str(total)
    return repo.get_by_coupon_id(coupon.id, skip=skip, limit=limit)  # type: ignore[arg-type]


@router.get(
    "/{code}/analytics",
    response_model=CouponAnalyticsResponse,
    summary="Get coupon analytics",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon_analytics(
    code: str,
    db: Session = Depends(get_db),
) -> CouponAnalyticsResponse:
    """Usage and discount totals for a coupon."""
    try:
        return CouponService(db).analytics(code)
    except CouponNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
