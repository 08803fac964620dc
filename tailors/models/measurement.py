"""
Tailors Backend - Measurement Model
===================================

What:  ORM model for the ``measurements`` table: body dimensions for one
       customer, in the shop's unit (inches), two decimal places.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, TIMESTAMP, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailors.database import Base

if TYPE_CHECKING:
    from tailors.models.customer import Customer


class Measurement(Base):
    __tablename__ = "measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE", name="fk_measurements_customer"),
        nullable=False,
    )
    chest: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    waist: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    shoulder: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    length: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    customer: Mapped["Customer"] = relationship(back_populates="measurements")

    def __repr__(self) -> str:
        return f"<Measurement(id={self.id}, customer_id={self.customer_id})>"
