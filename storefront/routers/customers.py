from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.core.database import get_db
from storefront.models.customer import Customer, CustomerGroup
from storefront.models.order import Order
from storefront.repositories.customer_repository import (
    CustomerGroupRepository,
    CustomerRepository,
)
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.customer import (
    CustomerCreate,
    CustomerGroupCreate,
    CustomerGroupResponse,
    CustomerResponse,
    OrderResponse,
)

router = APIRouter()


@router.post(
    "/groups",
    response_model=CustomerGroupResponse,
    status_code=201,
    summary="Create customer group",
    responses={409: {"description": "Customer group with this code already exists"}},
)
async def create_customer_group(
    data: CustomerGroupCreate,
    db: Session = Depends(get_db),
) -> CustomerGroup:
    repo = CustomerGroupRepository(db)
    if repo.get_by_code(data.code):
        raise HTTPException(
            status_code=409, detail="Customer group with this code already exists"
        )
    return repo.create(data)


@router.get(
    "/groups",
    response_model=list[CustomerGroupResponse],
    summary="List customer groups",
)
async def list_customer_groups(db: Session = Depends(get_db)) -> list[CustomerGroup]:
    return CustomerGroupRepository(db).get_all()


@router.post(
    "/",
    response_model=CustomerResponse,
    status_code=201,
    summary="Create customer",
    responses={
        400: {"description": "Unknown customer group"},
        409: {"description": "Customer with this external_id already exists"},
    },
)
async def create_customer(data: CustomerCreate, db: Session = Depends(get_db)) -> Customer:
    """Create a customer, optionally placing them in existing groups."""
    repo = CustomerRepository(db)
    if repo.get_by_external_id(data.external_id):
        raise HTTPException(
            status_code=409, detail="Customer with this external_id already exists"
        )
    groups = CustomerGroupRepository(db).get_by_codes(data.group_codes)
    missing = set(data.group_codes) - {str(g.code) for g in groups}
    if missing:
        raise HTTPException(
            status_code=400, detail=f"Unknown customer groups: {', '.join(sorted(missing))}"
        )
    return repo.create(data, groups)


@router.get(
    "/",
    response_model=list[CustomerResponse],
    summary="List customers",
)
async def list_customers(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[Customer]:
    """List all customers with pagination."""
    repo = CustomerRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


def _get_customer_by_external_id(external_id: str, db: Session) -> Customer:
    """Look up a customer by external_id, raising 404 if not found."""
    customer = CustomerRepository(db).get_by_external_id(external_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get(
    "/{external_id}",
    response_model=CustomerResponse,
    summary="Get customer",
    responses={404: {"description": "Customer not found"}},
)
async def get_customer(external_id: str, db: Session = Depends(get_db)) -> Customer:
    return _get_customer_by_external_id(external_id, db)


@router.get(
    "/{external_id}/orders",
    response_model=list[OrderResponse],
    summary="List customer orders",
    responses={404: {"description": "Customer not found"}},
)
async def list_customer_orders(external_id: str, db: Session = Depends(get_db)) -> list[Order]:
    customer = _get_customer_by_external_id(external_id, db)
    return OrderRepository(db).get_by_customer_id(customer.id)  # type: ignore[arg-type]
