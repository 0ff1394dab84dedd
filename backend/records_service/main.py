"""
Records Service - FastAPI Application Factory
==============================================

What:  Builds the FastAPI application from an explicit Settings value.
How:   create_app(settings) wires the database manager, middleware, exception
       handlers and the /records router. Nothing is configured at import time.
Who:   Called by the CLI (cli.py), by tests, or by uvicorn in factory mode:
           uvicorn --factory records_service.main:create_app

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌────────────────┐    │
    │  │ Req ID   │→│  Logging    │→│ 500 fallback   │    │
    │  └──────────┘ └─────────────┘ └────────────────┘    │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────┐ ┌──────────────────────────┐│
    │  │ GET/POST /records  │ │ GET/PUT/DELETE /records/ ││
    │  └────────────────────┘ └──────────────────────────┘│
    │                                                     │
    │  Exception Handlers (empty bodies):                 │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB→500       │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  verify database connectivity (SELECT 1); failure aborts startup
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError

from records_service import __version__
from records_service.config import Settings, load_settings
from records_service.database import DatabaseSessionManager
from records_service.exceptions import DatabaseError, NotFoundError, ValidationError
from records_service.middleware.errors import UnhandledExceptionMiddleware
from records_service.middleware.logging import RequestLoggingMiddleware
from records_service.middleware.request_id import RequestIDMiddleware, request_id_var
from records_service.routes import records

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2006-01-02 15:04:05 [LEVEL] logger.name: message
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request and per-statement chatter; the access middleware covers requests
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Check the database before serving; dispose the pool on shutdown.

    An unreachable database is fatal: the exception propagates and the ASGI
    server aborts startup.
    """
    db: DatabaseSessionManager = app.state.db
    logger.info("Using DB URL: %s", db.url.render_as_string(hide_password=True))

    try:
        await db.ping()
    except Exception as e:
        logger.critical("Unable to connect to database: %s", e)
        await db.dispose()
        raise
    logger.info("Connected!")

    yield

    await db.dispose()
    logger.info("Database connections closed")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to empty-bodied responses.

    Handler hierarchy:
        ValidationError         → 400 (logged at warning)
        RequestValidationError  → 400 (logged at warning)
        NotFoundError           → 404 (not logged)
        DatabaseError           → 500 (logged at error with its cause)

    Anything else is turned into a 500 by UnhandledExceptionMiddleware.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Bad request: %s", rid, exc.message)
        return Response(status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError,
    ):
        rid = request_id_var.get("")
        logger.warning("[%s] Bad request on %s: %s", rid, request.url.path, exc.errors())
        return Response(status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return Response(status_code=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Database error: %s | Context: %s | Cause: %r",
            rid,
            exc.message,
            exc.context,
            exc.__cause__,
        )
        return Response(status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration built by the caller. When omitted (uvicorn
                  factory mode) settings are loaded from the environment and
                  logging is configured here.

    Only the /records routes are served: the interactive docs and the OpenAPI
    schema endpoints are disabled, and a trailing slash is not redirected.
    """
    if settings is None:
        settings = load_settings()
        setup_logging(settings.log_level)

    app = FastAPI(
        title="Records Service",
        description="CRUD over a single records table (id, name, type).",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = DatabaseSessionManager(settings.db)

    # Last added runs first: RequestID wraps Logging wraps the 500 fallback
    app.add_middleware(UnhandledExceptionMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(records.router)

    return app
