"""
Tailors Backend - Access Log
============================

One line per handled request on the ``tailors.access`` logger:

    POST /orders -> 201 in 12.4ms user=karan from 10.0.0.7
    GET /customers -> 401 in 0.9ms auth=expired from 10.0.0.7

``user`` is the token subject the bearer check stored on ``request.state``.
``auth`` is why the bearer check refused the request, recorded only on 401s.
The request ID comes from the log filter, not the message.

Not logged: request bodies (customer names, phones and addresses) and the
Authorization header. Root and health probes are not logged at all.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("tailors.access")

PROBE_PATHS = frozenset({"/", "/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def describe_caller(request: Request, status: int) -> str:
    """``user=<sub>``, ``auth=<reason>`` for a refused token, or ``anonymous``."""
    user = getattr(request.state, "user", None)
    if user:
        return f"user={user.get('sub', '?')}"
    failure = getattr(request.state, "auth_failure", None)
    if status == 401 and failure:
        return f"auth={failure}"
    return "anonymous"


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in PROBE_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        caller = describe_caller(request, status)
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            level_for_status(status),
            "%s %s -> %d in %.1fms %s from %s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            caller,
            client_ip,
        )
        return response
