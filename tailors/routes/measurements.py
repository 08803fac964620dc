"""
Tailors Backend - Measurement Routes
====================================

What:  /measurements CRUD. Mounted behind ``BearerAuth`` in create_app.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.database import get_db_session
from tailors.schemas.common import ErrorResponse
from tailors.schemas.measurement import (
    MeasurementCreate,
    MeasurementResponse,
    MeasurementUpdate,
)
from tailors.services.measurement_service import measurement_service

router = APIRouter(
    prefix="/measurements",
    tags=["Measurements"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Measurement or customer not found", "model": ErrorResponse}}


@router.get("", response_model=List[MeasurementResponse])
async def list_measurements(
    customer_id: Optional[int] = Query(default=None, gt=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[MeasurementResponse]:
    return await measurement_service.list_measurements(db, customer_id=customer_id)


@router.post("", response_model=MeasurementResponse, status_code=201, responses=_NOT_FOUND)
async def create_measurement(
    data: MeasurementCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MeasurementResponse:
    return await measurement_service.create_measurement(db, data)


@router.get("/{measurement_id}", response_model=MeasurementResponse, responses=_NOT_FOUND)
async def get_measurement(
    measurement_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MeasurementResponse:
    return await measurement_service.get_measurement(db, measurement_id)


@router.put("/{measurement_id}", response_model=MeasurementResponse, responses=_NOT_FOUND)
async def update_measurement(
    measurement_id: int,
    data: MeasurementUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MeasurementResponse:
    return await measurement_service.update_measurement(db, measurement_id, data)


@router.delete("/{measurement_id}", status_code=204, responses=_NOT_FOUND)
async def delete_measurement(
    measurement_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await measurement_service.delete_measurement(db, measurement_id)
    return Response(status_code=204)
