"""
Transaction Ledger Backend — FastAPI Application Factory
=========================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn txledger.main:app`) and the test client.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware:  Request ID → Logging → GZip → CORS        │
    │                                                         │
    │  Routes:                                                │
    │  ┌────────────────┐ ┌────────────────────┐ ┌─────────┐  │
    │  │ /transactions  │ │ /transactions-type │ │ /health │  │
    │  └────────────────┘ └────────────────────┘ └─────────┘  │
    │                                                         │
    │  Exception Handlers (one envelope for all):             │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │ Store→500│  │
    │  └───────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, SQLite table bootstrap
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from txledger import __version__
from txledger.config import settings
from txledger.database import create_all, dispose_engine
from txledger.exceptions import (
    AuthenticationError,
    NotFoundError,
    StoreError,
    TxLedgerError,
    ValidationError,
)
from txledger.middleware.logging import RequestLoggingMiddleware
from txledger.middleware.request_id import RequestIDMiddleware, request_id_var
from txledger.routes import health, transaction_types, transactions
from txledger.schemas.common import ErrorData, ErrorEnvelope
from txledger.services.validation import to_violations

logger = logging.getLogger(__name__)

GENERIC_STORE_MESSAGE = "A database error occurred. Please try again later."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout so
    the container runtime collects it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Transaction Ledger Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if settings.is_sqlite:
        # Local runs have no migration step; create the tables directly
        await create_all()
        logger.info("SQLite tables ensured at %s", settings.database_url)

    logger.info("Allowed front-end origin: %s", settings.frontend_origin)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Transaction Ledger Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    message: str,
    details: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    """Render the error envelope: {code, status, message, data: {error, details?}, request_id}."""
    envelope = ErrorEnvelope(
        code=status_code,
        message=message,
        data=ErrorData(error=message, details=details),
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the shared error envelope.

    Handler hierarchy:
        ValidationError          → 400 (every violation listed)
        RequestValidationError   → 400 (unparseable or non-object body)
        AuthenticationError      → 401
        NotFoundError            → 404
        StoreError               → 500 (driver message unless disabled)
        TxLedgerError (base)     → its status_code
        HTTPException            → its status (unknown route, bad method)
        Exception (fallback)     → 500, generic message, traceback logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Validation failed on %s %s: %s",
            request_id_var.get(""), request.method, request.url.path,
            [d.get("field") for d in exc.details],
        )
        return error_response(400, exc.message, details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details = to_violations(exc.errors())
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), details)
        return error_response(400, "Validation failed", details=details)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        message = exc.message if settings.expose_store_errors else GENERIC_STORE_MESSAGE
        return error_response(500, message)

    @app.exception_handler(TxLedgerError)
    async def handle_app_error(request: Request, exc: TxLedgerError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        return error_response(500, GENERIC_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Transaction Ledger API",
        description=(
            "CRUD service for transaction types (payment/bank categories) and the "
            "transactions that reference them."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → routes

    # Only the configured front end may call with cookies attached
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(transactions.router)
    app.include_router(transaction_types.router)
    app.include_router(health.router)

    return app


app = create_app()
