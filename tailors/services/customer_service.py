"""
Tailors Backend - Customer Service
==================================

What:  Create, read, update, delete and search customers.
How:   Stateless service; every call receives the request's AsyncSession.
       Missing rows become NotFoundError, unexpected SQLAlchemy failures
       become DatabaseError.

Deleting a customer relies on the ON DELETE CASCADE foreign keys to remove
their measurements and orders.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.exceptions import DatabaseError, NotFoundError, ValidationError
from tailors.models import Customer
from tailors.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Make ``%`` and ``_`` match themselves in a LIKE pattern."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class CustomerService:
    """Business logic for the customers table."""

    async def _load(self, db: AsyncSession, customer_id: int) -> Customer:
        customer = await db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError(resource="customer", resource_id=customer_id)
        return customer

    async def list_customers(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
    ) -> List[CustomerResponse]:
        """
        Newest customers first, optionally filtered.

        ``search`` matches a case-insensitive substring of name or phone.
        ``%`` and ``_`` in it are literal characters, not wildcards.
        """
        query = select(Customer).order_by(Customer.id.desc())
        if search and search.strip():
            pattern = f"%{escape_like(search.strip())}%"
            query = query.where(
                or_(
                    Customer.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Customer.phone.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        result = await db.execute(query)
        return [CustomerResponse.model_validate(row) for row in result.scalars().all()]

    async def get_customer(self, db: AsyncSession, customer_id: int) -> CustomerResponse:
        customer = await self._load(db, customer_id)
        return CustomerResponse.model_validate(customer)

    async def create_customer(self, db: AsyncSession, data: CustomerCreate) -> CustomerResponse:
        customer = Customer(**data.model_dump())
        db.add(customer)
        try:
            await db.flush()
            # created_at is filled in by the database
            await db.refresh(customer)
        except SQLAlchemyError as e:
            logger.error("Failed to create customer: %s", str(e))
            raise DatabaseError(context={"operation": "create_customer", "error": str(e)}) from e

        logger.info("Customer created: id=%s", customer.id)
        return CustomerResponse.model_validate(customer)

    async def update_customer(
        self,
        db: AsyncSession,
        customer_id: int,
        data: CustomerUpdate,
    ) -> CustomerResponse:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError(message="No fields to update")

        customer = await self._load(db, customer_id)
        for field, value in changes.items():
            setattr(customer, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to update customer %s: %s", customer_id, str(e))
            raise DatabaseError(context={"operation": "update_customer", "error": str(e)}) from e
        await db.refresh(customer)

        return CustomerResponse.model_validate(customer)

    async def delete_customer(self, db: AsyncSession, customer_id: int) -> None:
        customer = await self._load(db, customer_id)
        try:
            await db.delete(customer)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to delete customer %s: %s", customer_id, str(e))
            raise DatabaseError(context={"operation": "delete_customer", "error": str(e)}) from e

        logger.info("Customer deleted: id=%s", customer_id)

    async def ensure_exists(self, db: AsyncSession, customer_id: int) -> None:
        """Raises NotFoundError unless the customer exists."""
        await self._load(db, customer_id)


customer_service = CustomerService()
