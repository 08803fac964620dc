"""
Tailors Backend - Measurement Service
=====================================

What:  CRUD for customer body measurements.
       A measurement can only be created for a customer that exists.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tailors.exceptions import DatabaseError, NotFoundError, ValidationError
from tailors.models import Measurement
from tailors.schemas.measurement import (
    MeasurementCreate,
    MeasurementResponse,
    MeasurementUpdate,
)
from tailors.services.customer_service import customer_service

logger = logging.getLogger(__name__)


class MeasurementService:

    async def _load(self, db: AsyncSession, measurement_id: int) -> Measurement:
        measurement = await db.get(Measurement, measurement_id)
        if measurement is None:
            raise NotFoundError(resource="measurement", resource_id=measurement_id)
        return measurement

    async def list_measurements(
        self,
        db: AsyncSession,
        customer_id: Optional[int] = None,
    ) -> List[MeasurementResponse]:
        """Latest first; restricted to one customer when ``customer_id`` is given."""
        query = select(Measurement).order_by(Measurement.id.desc())
        if customer_id is not None:
            query = query.where(Measurement.customer_id == customer_id)

        result = await db.execute(query)
        return [MeasurementResponse.model_validate(row) for row in result.scalars().all()]

    async def get_measurement(self, db: AsyncSession, measurement_id: int) -> MeasurementResponse:
        return MeasurementResponse.model_validate(await self._load(db, measurement_id))

    async def create_measurement(
        self,
        db: AsyncSession,
        data: MeasurementCreate,
    ) -> MeasurementResponse:
        await customer_service.ensure_exists(db, data.customer_id)

        measurement = Measurement(**data.model_dump())
        db.add(measurement)
        try:
            await db.flush()
            await db.refresh(measurement)
        except SQLAlchemyError as e:
            logger.error("Failed to create measurement: %s", str(e))
            raise DatabaseError(context={"operation": "create_measurement", "error": str(e)}) from e

        return MeasurementResponse.model_validate(measurement)

    async def update_measurement(
        self,
        db: AsyncSession,
        measurement_id: int,
        data: MeasurementUpdate,
    ) -> MeasurementResponse:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError(message="No fields to update")

        measurement = await self._load(db, measurement_id)
        for field, value in changes.items():
            setattr(measurement, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to update measurement %s: %s", measurement_id, str(e))
            raise DatabaseError(context={"operation": "update_measurement", "error": str(e)}) from e
        await db.refresh(measurement)

        return MeasurementResponse.model_validate(measurement)

    async def delete_measurement(self, db: AsyncSession, measurement_id: int) -> None:
        measurement = await self._load(db, measurement_id)
        try:
            await db.delete(measurement)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to delete measurement %s: %s", measurement_id, str(e))
            raise DatabaseError(context={"operation": "delete_measurement", "error": str(e)}) from e


measurement_service = MeasurementService()
