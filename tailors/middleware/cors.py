"""
Tailors Backend - Origin Allow-List Middleware
==============================================

What:  Rejects browser requests whose Origin is not on the allow-list.
How:   Runs before Starlette's CORSMiddleware. Requests without an Origin
       header (curl, Postman, server-to-server) pass through untouched.
       Allowed origins then get the usual CORS headers from CORSMiddleware.

Why a separate middleware:
    CORSMiddleware only omits headers for unknown origins on simple
    requests, so the handler still runs. This layer stops the request.
"""

import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from tailors.middleware.request_id import current_request_id

logger = logging.getLogger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Answers 403 with a JSON ``message`` for origins off the list."""

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        return origin in self.allowed_origins

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("Origin")
        if self.is_allowed(origin):
            return await call_next(request)

        logger.warning("CORS blocked for origin: %s", origin)
        return JSONResponse(
            status_code=403,
            content={
                "error": "cors_blocked",
                "message": f"CORS blocked for origin: {origin}",
                "request_id": current_request_id(),
            },
        )
