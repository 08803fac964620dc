"""
Tailors Backend - Order Model
=============================

What:  ORM model for the ``orders`` table: one garment order with its
       price, payments received and the trial/delivery schedule.

Payment tracking:
    ``paid_amount`` accumulates what the customer has paid so far and is
    stored independently of ``price``. Nothing here caps it at the price.

Older databases may lack ``paid_amount``, ``payment_mode``, ``payment_date``
or ``trial_date``; the schema bootstrapper adds them on startup.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, TIMESTAMP, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailors.database import Base

if TYPE_CHECKING:
    from tailors.models.customer import Customer

DEFAULT_ORDER_STATUS = "Pending"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE", name="fk_orders_customer"),
        nullable=False,
    )
    dress_type: Mapped[str] = mapped_column(String(120), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0"),
        server_default=text("0"),
    )
    trial_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=DEFAULT_ORDER_STATUS,
        server_default=text(f"'{DEFAULT_ORDER_STATUS}'"),
    )
    payment_mode: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    customer: Mapped["Customer"] = relationship(back_populates="orders")

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, customer_id={self.customer_id}, "
            f"status='{self.status}')>"
        )
