"""
Tailors Backend - FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app(settings, engine)`` returns a configured FastAPI app.
       Settings and engine are passed in explicitly and kept on ``app.state``.
Who:   uvicorn (``uvicorn tailors.main:app``), the ``tailors-backend`` script,
       and tests that build isolated apps.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware (outermost first):                          │
    │  Request ID → Logging → Origin allow-list → CORS        │
    │                                                         │
    │  Routes:                                                │
    │  GET /  GET /health  /auth/*                 (public)   │
    │  /customers  /measurements  /orders   (BearerAuth dep)  │
    │                                                         │
    │  Exception Handlers:                                    │
    │  TailorsError→status of the subclass                    │
    │  invalid JSON→400  validation→422  HTTP→status  else→500│
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup (any failure aborts the process with a non-zero exit):
    1. Configure logging
    2. Verify database connectivity (SELECT 1)
    3. Bootstrap schema (create tables, add missing order columns)

    Shutdown:
    1. Dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from tailors import __version__
from tailors.config import Settings, get_settings
from tailors.database import build_engine, build_session_factory, check_connectivity
from tailors.exceptions import (
    DatabaseError,
    MalformedPayloadError,
    TailorsError,
)
from tailors.middleware.auth import BearerAuth
from tailors.middleware.cors import OriginAllowListMiddleware
from tailors.middleware.logging import RequestLoggingMiddleware
from tailors.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    current_request_id,
)
from tailors.routes import auth, customers, health, measurements, orders
from tailors.services.schema_service import bootstrap_schema

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once for the whole process.

    Every record passes through ``RequestIDLogFilter`` so the format can
    print the ID of the request it was logged under ("-" at startup).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party libraries that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic.runtime.migration").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging → connectivity check → schema bootstrap.

    Failures are logged and re-raised. uvicorn then reports
    "Application startup failed" and exits non-zero; nothing is retried.
    """
    settings: Settings = app.state.settings
    engine: AsyncEngine = app.state.engine

    setup_logging(settings)
    logger.info("%s %s starting up...", settings.service_name, __version__)

    try:
        await check_connectivity(engine)
        logger.info("Database connected")
        await bootstrap_schema(engine)
    except TailorsError as e:
        logger.critical("Startup aborted: %s", e.message)
        await engine.dispose()
        raise

    logger.info("Backend running on %s:%d", settings.host, settings.port)

    yield

    logger.info("%s shutting down...", settings.service_name)
    await engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, error: str, **extra) -> dict:
    body = {"error": error, "message": message, "request_id": current_request_id()}
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses. Every body carries ``message``.

    Handler hierarchy:
        DatabaseError           → 500 with a generic message
        TailorsError (base)     → exc.status_code (401/400/404/500)
        RequestValidationError  → 400 for unparseable JSON (parser message in
                                  ``error``), else 422
        HTTPException           → its status, detail as message
        Exception (fallback)    → 500 "Server error"
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Details are logged server-side, never returned."""
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("An internal error occurred. Please try again later.", "server_error"),
        )

    @app.exception_handler(TailorsError)
    async def handle_tailors_error(request: Request, exc: TailorsError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.error_code),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        for err in errors:
            if err.get("type") == "json_invalid":
                detail = (err.get("ctx") or {}).get("error") or err.get("msg", "")
                malformed = MalformedPayloadError(detail=str(detail))
                logger.warning("%s: %s", malformed.message, detail)
                return JSONResponse(
                    status_code=malformed.status_code,
                    content=_error_body(malformed.message, malformed.detail or malformed.error_code),
                )

        return JSONResponse(
            status_code=422,
            content=_error_body(
                "Request validation failed",
                "validation_error",
                details=jsonable_encoder(errors),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("Server error", "internal_server_error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Immutable configuration. Loaded from the environment when
                  omitted, which fails if JWT_SECRET is missing.
        engine:   Async engine to use. Built from ``settings`` when omitted.
    """
    settings = settings or get_settings()
    engine = engine or build_engine(settings)

    app = FastAPI(
        title="Karanjkar Tailors API",
        description="Customers, measurements and orders for a tailoring shop.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.bearer_auth = BearerAuth(settings.jwt_secret, settings.jwt_algorithm)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origins)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    protected = [Depends(app.state.bearer_auth)]
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(customers.router, dependencies=protected)
    app.include_router(measurements.router, dependencies=protected)
    app.include_router(orders.router, dependencies=protected)

    return app


def serve() -> None:
    """Console entry point: run the app under uvicorn with configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tailors.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `tailors.main:app` to be importable
app = create_app()
