"""
Tailors Backend - Bearer Token Authentication
=============================================

What:  Guards the protected route groups (/customers, /measurements, /orders).
How:   ``BearerAuth`` is a callable FastAPI dependency attached to each
       protected router. It reads the Authorization header, verifies the
       token and stores the decoded claims on ``request.state.user``.
Who:   Constructed once in ``create_app`` from Settings.

Outcomes:
    header absent / not "Bearer "  → MissingTokenError  (401 "Missing authorization token")
    empty token after trimming     → MissingTokenError  (401 "Invalid authorization token")
    verification failure           → UnauthorizedError  (401 "Unauthorized")
    valid token                    → claims on request.state.user

Every refusal also sets ``request.state.auth_failure`` (missing, empty,
expired, claims, invalid) for the access log.
"""

import logging
from typing import Any, Dict

from starlette.requests import Request

from tailors.exceptions import MissingTokenError, UnauthorizedError
from tailors.security import DEFAULT_ALGORITHM, InvalidTokenError, verify_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class BearerAuth:
    """
    Dependency that authenticates a request with a bearer token.

    Usage:
        auth = BearerAuth(settings.jwt_secret, settings.jwt_algorithm)
        app.include_router(customers.router, dependencies=[Depends(auth)])
    """

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        self._secret = secret
        self._algorithm = algorithm

    async def __call__(self, request: Request) -> Dict[str, Any]:
        header = request.headers.get("Authorization", "")
        if not header.startswith(BEARER_PREFIX):
            request.state.auth_failure = "missing"
            raise MissingTokenError()

        token = header[len(BEARER_PREFIX):].strip()
        if not token:
            request.state.auth_failure = "empty"
            raise MissingTokenError(message="Invalid authorization token")

        try:
            claims = verify_token(token, self._secret, self._algorithm)
        except InvalidTokenError as exc:
            request.state.auth_failure = exc.reason
            logger.debug("Token rejected on %s: %s", request.url.path, exc.reason)
            raise UnauthorizedError(context={"reason": exc.reason}) from exc

        request.state.user = claims
        return claims


async def require_user(request: Request) -> Dict[str, Any]:
    """
    Per-endpoint guard using the app's configured ``BearerAuth``.

    Reuses claims already attached by a router-level guard.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return user
    bearer_auth: BearerAuth = request.app.state.bearer_auth
    return await bearer_auth(request)
