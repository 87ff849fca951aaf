"""
Tenistas API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, routes, error handling and
       lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn tenistas.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:      /api/raquetas (CRUD)   /health        │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→400 │ NotFound→404 │ DB/other→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Database backend: create tables (if enabled)
    3. Seed demo rackets into an empty store (if enabled)

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenistas import __version__
from tenistas.config import settings
from tenistas.data.raquetas_demo import seed_demo_data
from tenistas.database import dispose_engine, init_models, session_scope
from tenistas.exceptions import (
    DatabaseError,
    NotFoundError,
    TenistasError,
    ValidationError,
)
from tenistas.middleware.logging import RequestLoggingMiddleware
from tenistas.middleware.request_id import (
    RequestIDMiddleware,
    current_request_id,
    error_body,
)
from tenistas.repositories.memory import InMemoryRaquetasRepository
from tenistas.repositories.sql import SqlRaquetasRepository
from tenistas.routes import health, raquetas
from tenistas.schemas.raqueta import FieldError

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup before the yield, shutdown after it."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    backend = app.state.repository_backend
    logger.info("Tenistas API %s starting up (repository: %s)", __version__, backend)

    if backend == "database":
        if settings.db_create_tables:
            await init_models()
            logger.info("Database tables ready")
        if settings.seed_demo_data:
            async with session_scope() as session:
                created = await seed_demo_data(SqlRaquetasRepository(session))
            logger.info("Seeded %d demo rackets", created)
    elif settings.seed_demo_data:
        created = await seed_demo_data(app.state.memory_repository)
        logger.info("Seeded %d demo rackets", created)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Tenistas API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _field_errors(exc: RequestValidationError) -> List[FieldError]:
    """
    Flatten FastAPI's parsing errors into field/message pairs.

    The field is the last element of the error location ("price" for
    ("body", "price")); errors on the whole body report "body".
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = loc[-1] if loc else "body"
        errors.append(FieldError(field=field, message=error.get("msg", "Invalid value")))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request (with field errors)
        RequestValidationError  → 400 Bad Request (same shape)
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error (generic message)
        TenistasError (base)    → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Internal details (stack traces, SQL) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Validation error: %s", current_request_id(), exc.context.get("errors")
        )
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return await handle_validation_error(request, ValidationError(errors=_field_errors(exc)))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_body("not_found", exc.message, exc.context),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            current_request_id(), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "server_error", "An internal error occurred. Please try again later."
            ),
        )

    @app.exception_handler(TenistasError)
    async def handle_application_error(request: Request, exc: TenistasError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            current_request_id(), exc.message, exc.context,
        )
        return JSONResponse(status_code=500, content=error_body("server_error", exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", current_request_id(), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(repository_backend: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository_backend: "memory" or "database"; defaults to
            settings.repository_backend. Each app built with the memory
            backend owns its own, initially empty, racket table.
    """
    app = FastAPI(
        title="Tenistas API",
        description="CRUD REST service for tennis rackets (raquetas).",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.repository_backend = repository_backend or settings.repository_backend
    app.state.memory_repository = InMemoryRaquetasRepository()

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(raquetas.router)
    app.include_router(health.router)

    return app


# uvicorn expects `tenistas.main:app` to be importable
app = create_app()
