"""
Tailors Backend - Request Correlation
=====================================

What:  Gives every request an ID, echoes it in X-Request-ID and stamps it on
       every log record emitted while the request is handled.
How:   ``RequestIDMiddleware`` stores the ID in ``request_id_var``.
       ``RequestIDLogFilter`` is installed on the root handler by
       ``setup_logging`` and copies the ID onto ``record.request_id`` so the
       format string can print it. Loggers elsewhere never pass it by hand.

A client-supplied X-Request-ID is reused only when it is a short token of
letters, digits, dot, dash or underscore. Anything else is replaced, so
log lines cannot be forged through the header.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_VALID_CLIENT_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id() -> str:
    """ID of the request being handled, or "" outside a request."""
    return request_id_var.get()


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def resolve_request_id(header_value: str | None) -> str:
    if header_value and _VALID_CLIENT_ID.match(header_value):
        return header_value
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """Sets ``record.request_id`` ("-" for records outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or NO_REQUEST_ID
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Outermost middleware. The ID is left in the context after the response
    so the server-error handler, which sits outside user middleware, can
    still report it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
