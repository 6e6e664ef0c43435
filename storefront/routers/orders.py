"""Order API endpoints used by the order-placement service."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.core.database import get_db
from storefront.models.order import Order
from storefront.repositories.customer_repository import CustomerRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.customer import OrderCreate, OrderResponse, OrderStatusUpdate

router = APIRouter()


@router.post(
    "/",
    response_model=OrderResponse,
    status_code=201,
    summary="Create order",
    responses={
        404: {"description": "Customer not found"},
        409: {"description": "Order with this number already exists"},
    },
)
async def create_order(data: OrderCreate, db: Session = Depends(get_db)) -> Order:
    if not CustomerRepository(db).get_by_id(data.customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    repo = OrderRepository(db)
    if repo.get_by_order_number(data.order_number):
        raise HTTPException(status_code=409, detail="Order with this number already exists")
    return repo.create(data)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_id: UUID, db: Session = Depends(get_db)) -> Order:
    order = OrderRepository(db).get_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    responses={404: {"description": "Order not found"}},
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
) -> Order:
    """Move an order to a new status. Cancelled orders stop counting as prior orders."""
    order = OrderRepository(db).update_status(order_id, data.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
