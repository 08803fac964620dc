"""
Tailors Backend - Root and Health Probes
========================================

What:  ``GET /`` identifies the service; ``GET /health`` checks the database.
Who:   Load balancers, container health checks, uptime monitors.

/health runs ``SELECT 1`` on a pooled connection. On failure it answers 500
with the driver's message and keeps the process running.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tailors.database import ping
from tailors.schemas.common import HealthResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/", response_model=RootResponse, summary="Service identity")
async def root(request: Request) -> RootResponse:
    return RootResponse(service=request.app.state.settings.service_name)


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Database connectivity check",
)
async def health_check(request: Request):
    try:
        async with request.app.state.engine.connect() as conn:
            await ping(conn)
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})

    return HealthResponse(ok=True)
