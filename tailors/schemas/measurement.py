"""
Tailors Backend - Measurement Schemas
=====================================

What:  Pydantic request/response models for /measurements.
       Dimensions are positive decimals with at most two decimal places,
       matching the DECIMAL(10,2) columns.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field

Dimension = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]


class MeasurementCreate(BaseModel):
    customer_id: int = Field(gt=0, description="Customer these measurements belong to")
    chest: Dimension
    waist: Dimension
    shoulder: Dimension
    length: Dimension


class MeasurementUpdate(BaseModel):
    """Partial update. The owning customer cannot be changed."""

    chest: Optional[Dimension] = None
    waist: Optional[Dimension] = None
    shoulder: Optional[Dimension] = None
    length: Optional[Dimension] = None


class MeasurementResponse(BaseModel):
    id: int
    customer_id: int
    chest: Decimal
    waist: Decimal
    shoulder: Decimal
    length: Decimal
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
