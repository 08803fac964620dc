"""
Tailors Backend - Order Routes
==============================

What:  /orders CRUD and ``PATCH /orders/{id}/payment``.
       Mounted behind ``BearerAuth`` in create_app.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.database import get_db_session
from tailors.schemas.common import ErrorResponse
from tailors.schemas.order import OrderCreate, OrderResponse, OrderUpdate, PaymentUpdate
from tailors.services.order_service import order_service

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Order or customer not found", "model": ErrorResponse}}


@router.get("", response_model=List[OrderResponse], summary="List orders by delivery date")
async def list_orders(
    customer_id: Optional[int] = Query(default=None, gt=0),
    status: Optional[str] = Query(default=None, max_length=30),
    db: AsyncSession = Depends(get_db_session),
) -> List[OrderResponse]:
    return await order_service.list_orders(db, customer_id=customer_id, status=status)


@router.post("", response_model=OrderResponse, status_code=201, responses=_NOT_FOUND)
async def create_order(
    data: OrderCreate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.create_order(db, data)


@router.get("/{order_id}", response_model=OrderResponse, responses=_NOT_FOUND)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.get_order(db, order_id)


@router.put("/{order_id}", response_model=OrderResponse, responses=_NOT_FOUND)
async def update_order(
    order_id: int,
    data: OrderUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.update_order(db, order_id, data)


@router.patch(
    "/{order_id}/payment",
    response_model=OrderResponse,
    responses=_NOT_FOUND,
    summary="Record the amount paid so far",
)
async def record_payment(
    order_id: int,
    data: PaymentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.record_payment(db, order_id, data)


@router.delete("/{order_id}", status_code=204, responses=_NOT_FOUND)
async def delete_order(
    order_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await order_service.delete_order(db, order_id)
    return Response(status_code=204)
