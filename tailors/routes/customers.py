"""
Tailors Backend - Customer Routes
=================================

What:  /customers CRUD. Mounted behind ``BearerAuth`` in create_app.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.database import get_db_session
from tailors.schemas.common import ErrorResponse
from tailors.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from tailors.services.customer_service import customer_service

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Customer not found", "model": ErrorResponse}}


@router.get("", response_model=List[CustomerResponse], summary="List customers")
async def list_customers(
    search: Optional[str] = Query(
        default=None,
        max_length=120,
        description="Case-insensitive match on name or phone",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[CustomerResponse]:
    return await customer_service.list_customers(db, search=search)


@router.post("", response_model=CustomerResponse, status_code=201, summary="Create a customer")
async def create_customer(
    data: CustomerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.create_customer(db, data)


@router.get("/{customer_id}", response_model=CustomerResponse, responses=_NOT_FOUND)
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.get_customer(db, customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse, responses=_NOT_FOUND)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.update_customer(db, customer_id, data)


@router.delete(
    "/{customer_id}",
    status_code=204,
    responses=_NOT_FOUND,
    summary="Delete a customer with their measurements and orders",
)
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await customer_service.delete_customer(db, customer_id)
    return Response(status_code=204)
