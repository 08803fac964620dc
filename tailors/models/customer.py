"""
Tailors Backend - Customer Model
================================

What:  ORM model for the ``customers`` table.
How:   Owns measurements and orders through foreign keys declared
       ON DELETE CASCADE, so the database removes dependents with the customer.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String, Text, TIMESTAMP, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailors.database import Base

if TYPE_CHECKING:
    from tailors.models.measurement import Measurement
    from tailors.models.order import Order


class Customer(Base):
    """A shop customer. Deleting one deletes their measurements and orders."""

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # passive_deletes leaves the cascade to the database
    measurements: Mapped[List["Measurement"]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    orders: Mapped[List["Order"]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}')>"
