"""
Tailors Backend - Customer Schemas
==================================

What:  Pydantic request/response models for /customers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120, description="Customer's full name")
    phone: str = Field(min_length=1, max_length=30, description="Contact phone number")
    address: str = Field(min_length=1, description="Postal address")

    @field_validator("name", "phone", "address")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Rejects values that are only whitespace."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class CustomerUpdate(BaseModel):
    """Partial update: only the fields sent are changed."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=30)
    address: Optional[str] = Field(default=None, min_length=1)

    @field_validator("name", "phone", "address")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str
    address: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
