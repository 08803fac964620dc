"""
Tailors Backend - Shared Schemas
================================

What:  Probe responses, login payloads and the common error body.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned by every handler.

    Example:
        {
            "error": "missing_token",
            "message": "Missing authorization token",
            "request_id": "a1b2c3d4"
        }
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class RootResponse(BaseModel):
    ok: bool = True
    service: str


class HealthResponse(BaseModel):
    ok: bool
    error: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1, max_length=256)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: Dict[str, Any]
