"""
Tailors Backend - Auth Routes
=============================

What:  ``POST /auth/login`` issues bearer tokens; ``GET /auth/me`` echoes
       the caller's claims. The router itself is unauthenticated.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from tailors.middleware.auth import require_user
from tailors.schemas.common import ErrorResponse, LoginRequest, TokenResponse
from tailors.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(request: Request) -> AuthService:
    return AuthService(request.app.state.settings)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange username and password for a bearer token",
)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    return service.login(credentials)


@router.get(
    "/me",
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Claims of the current bearer token",
)
async def me(user: Dict[str, Any] = Depends(require_user)) -> Dict[str, Any]:
    return {"user": user}
