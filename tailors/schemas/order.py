"""
Tailors Backend - Order Schemas
===============================

What:  Pydantic request/response models for /orders and order payments.

Payment amounts:
    ``paid_amount`` must be non-negative. It is NOT compared with ``price``:
    whether overpayment (advance for a later order, rounding, tips) is
    legitimate has not been settled, so the API records what it is given.
    ``balance_due`` in responses is derived and may be negative.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, computed_field

Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class OrderCreate(BaseModel):
    customer_id: int = Field(gt=0)
    dress_type: str = Field(min_length=1, max_length=120, description="Garment, e.g. 'Sherwani'")
    price: Money
    paid_amount: Money = Decimal("0")
    trial_date: Optional[date] = None
    delivery_date: date
    status: str = Field(default="Pending", min_length=1, max_length=30)
    payment_mode: Optional[str] = Field(default=None, max_length=30)
    payment_date: Optional[date] = None


class OrderUpdate(BaseModel):
    """Partial update of an order's details. The customer cannot change."""

    dress_type: Optional[str] = Field(default=None, min_length=1, max_length=120)
    price: Optional[Money] = None
    paid_amount: Optional[Money] = None
    trial_date: Optional[date] = None
    delivery_date: Optional[date] = None
    status: Optional[str] = Field(default=None, min_length=1, max_length=30)
    payment_mode: Optional[str] = Field(default=None, max_length=30)
    payment_date: Optional[date] = None


class PaymentUpdate(BaseModel):
    """
    Records the payment state of an order.

    ``paid_amount`` is the new running total, not an increment.
    ``payment_date`` defaults to today when omitted.
    """

    paid_amount: Money
    payment_mode: Optional[str] = Field(default=None, max_length=30)
    payment_date: Optional[date] = None


class OrderResponse(BaseModel):
    id: int
    customer_id: int
    dress_type: str
    price: Decimal
    paid_amount: Decimal
    trial_date: Optional[date] = None
    delivery_date: date
    status: str
    payment_mode: Optional[str] = None
    payment_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def balance_due(self) -> Decimal:
        return self.price - self.paid_amount
