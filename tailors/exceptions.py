"""
Tailors Backend - Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-facing ``message`` and an optional
       ``context`` dict. Global handlers registered in main.py turn them into
       JSON responses that always include a ``message`` field.
Who:   Raised by services, the auth dependency and the startup sequence.

Exception Hierarchy:
    TailorsError (base)
    ├── MissingTokenError         → 401 (no/empty bearer credential)
    ├── UnauthorizedError         → 401 (bad signature, expired, malformed)
    ├── InvalidCredentialsError   → 401 (login rejected)
    ├── MalformedPayloadError     → 400 (unparseable JSON body)
    ├── ValidationError           → 400 (business-rule input errors)
    ├── NotFoundError             → 404
    ├── DatabaseError             → 500 (generic message to the client)
    ├── StoreUnavailableError     → fatal at startup, 500 on /health
    └── SchemaBootstrapError      → fatal at startup
"""

from typing import Any, Dict, Optional


class TailorsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned to the client)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingTokenError(TailorsError):
    """
    No usable bearer credential on a protected request.

    Raised when the Authorization header is absent, does not use the
    ``Bearer`` scheme, or carries an empty token.
    """

    status_code = 401
    error_code = "missing_token"

    def __init__(
        self,
        message: str = "Missing authorization token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(TailorsError):
    """
    The bearer token failed verification.

    Expiry, signature mismatch and malformed payloads all collapse into the
    same message. The specific reason is kept in ``context`` for logs.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(TailorsError):
    """Login attempt with an unknown username or wrong password."""

    status_code = 401
    error_code = "invalid_credentials"

    def __init__(
        self,
        message: str = "Invalid username or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedPayloadError(TailorsError):
    """Request body could not be parsed as JSON."""

    status_code = 400
    error_code = "malformed_payload"

    def __init__(
        self,
        message: str = "Invalid JSON payload",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if detail:
            ctx["detail"] = detail
        super().__init__(message=message, context=ctx)
        self.detail = detail


class ValidationError(TailorsError):
    """
    Client input that is well-formed but breaks a business rule.

    Example: an order update that names a customer that doesn't exist is a
    NotFoundError, while an empty update body is a ValidationError.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TailorsError):
    """
    Raised when a requested row does not exist.

    SQLAlchemy returns None for missing rows; services convert that into
    this exception so routes stay free of HTTP logic.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(TailorsError):
    """
    A query, insert or update failed unexpectedly.

    The client always gets a generic message; details are logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(TailorsError):
    """The data store did not answer the connectivity probe."""

    error_code = "store_unavailable"

    def __init__(
        self,
        message: str = "Database is unreachable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SchemaBootstrapError(TailorsError):
    """
    Creating tables or adding missing columns failed at startup.

    Never handled: it propagates out of the lifespan so the server refuses
    to start with an unverified schema.
    """

    error_code = "schema_bootstrap_failed"

    def __init__(
        self,
        message: str = "Schema bootstrap failed",
        phase: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if phase:
            ctx["phase"] = phase
        super().__init__(message=message, context=ctx)
        self.phase = phase
