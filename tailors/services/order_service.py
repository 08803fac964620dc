"""
Tailors Backend - Order Service
===============================

What:  CRUD for garment orders plus payment recording.
How:   Same shape as the other services: stateless, session passed in,
       NotFoundError for missing rows, DatabaseError for SQLAlchemy failures.

Payments:
    ``record_payment`` overwrites ``paid_amount`` with the new running total
    and stamps ``payment_mode`` / ``payment_date``. The amount is not checked
    against the order price.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.exceptions import DatabaseError, NotFoundError, ValidationError
from tailors.models import Order
from tailors.schemas.order import OrderCreate, OrderResponse, OrderUpdate, PaymentUpdate
from tailors.services.customer_service import customer_service

logger = logging.getLogger(__name__)

# Fields the database refuses to store as NULL
_NOT_NULL_FIELDS = frozenset({"dress_type", "price", "paid_amount", "delivery_date", "status"})


class OrderService:
    """Business logic for the orders table."""

    async def _load(self, db: AsyncSession, order_id: int) -> Order:
        order = await db.get(Order, order_id)
        if order is None:
            raise NotFoundError(resource="order", resource_id=order_id)
        return order

    async def _flush(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Order %s failed: %s", operation, str(e))
            raise DatabaseError(context={"operation": operation, "error": str(e)}) from e

    async def list_orders(
        self,
        db: AsyncSession,
        customer_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[OrderResponse]:
        """
        Orders sorted by delivery date, soonest first.

        Filters:
            customer_id: only this customer's orders
            status: exact status match (e.g. "Pending", "Delivered")
        """
        query = select(Order).order_by(Order.delivery_date.asc(), Order.id.asc())
        if customer_id is not None:
            query = query.where(Order.customer_id == customer_id)
        if status:
            query = query.where(Order.status == status)

        result = await db.execute(query)
        return [OrderResponse.model_validate(row) for row in result.scalars().all()]

    async def get_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        return OrderResponse.model_validate(await self._load(db, order_id))

    async def create_order(self, db: AsyncSession, data: OrderCreate) -> OrderResponse:
        await customer_service.ensure_exists(db, data.customer_id)

        order = Order(**data.model_dump())
        db.add(order)
        await self._flush(db, "create")
        await db.refresh(order)

        logger.info("Order created: id=%s customer_id=%s", order.id, order.customer_id)
        return OrderResponse.model_validate(order)

    async def update_order(
        self,
        db: AsyncSession,
        order_id: int,
        data: OrderUpdate,
    ) -> OrderResponse:
        """
        Apply the fields present in the request body.

        Optional columns (trial_date, payment_mode, payment_date) may be
        cleared by sending null; required columns may not.
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError(message="No fields to update")
        for field in _NOT_NULL_FIELDS.intersection(changes):
            if changes[field] is None:
                raise ValidationError(message=f"'{field}' cannot be null", field=field)

        order = await self._load(db, order_id)
        for field, value in changes.items():
            setattr(order, field, value)
        await self._flush(db, "update")
        await db.refresh(order)

        return OrderResponse.model_validate(order)

    async def record_payment(
        self,
        db: AsyncSession,
        order_id: int,
        data: PaymentUpdate,
    ) -> OrderResponse:
        order = await self._load(db, order_id)
        order.paid_amount = data.paid_amount
        if data.payment_mode is not None:
            order.payment_mode = data.payment_mode
        order.payment_date = data.payment_date or date.today()
        await self._flush(db, "record_payment")
        await db.refresh(order)

        logger.info(
            "Payment recorded: order_id=%s paid_amount=%s mode=%s",
            order.id,
            order.paid_amount,
            order.payment_mode,
        )
        return OrderResponse.model_validate(order)

    async def delete_order(self, db: AsyncSession, order_id: int) -> None:
        order = await self._load(db, order_id)
        await db.delete(order)
        await self._flush(db, "delete")


order_service = OrderService()
