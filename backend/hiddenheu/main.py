"""
HiddenHeu Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the module-level `app` is what uvicorn serves
       (uvicorn hiddenheu.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  Request ID → Rate Limit → Logging → CORS   │
    │                                                          │
    │  Routers:     auth · cities · places · favorites         │
    │               testimonials · translate · health          │
    │                                                          │
    │  Services:    Auth · Catalog · Review · Favorite         │
    │               Translation (Gemini + LRU cache)           │
    │                                                          │
    │  Storage:     MemStorage (in-memory, seeded at startup)  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check configuration, build and seed the
              store, log what was loaded.
    Shutdown: log the number of sessions that are dropped with the process.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hiddenheu import __version__
from hiddenheu.config import settings
from hiddenheu.exceptions import (
    AuthenticationError,
    CircuitBreakerOpenError,
    ConflictError,
    HiddenHeuError,
    NotFoundError,
    RateLimitExceededError,
    TranslationServiceError,
    ValidationError,
)
from hiddenheu.middleware import (
    RateLimitMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    request_id_var,
)
from hiddenheu.routes import auth, cities, favorites, health, places, testimonials, translate
from hiddenheu.security import session_manager
from hiddenheu.storage import get_storage

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: `2024-01-15T12:00:00 [INFO] hiddenheu.access: GET /api/places 200 ...`
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("HiddenHeu Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The catalog works without Gemini; only translation answers 503
        logger.warning("Configuration warning: %s", str(e))

    store = get_storage()
    logger.info("Store contents: %s", store.counts())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "HiddenHeu Backend shutting down; %d active session(s) will be dropped",
        len(session_manager),
    )
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str, details=None, headers=None) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the standard error body.

    Handler hierarchy:
        ValidationError, RequestValidationError → 400 validation_error
        ConflictError                           → 400 conflict
        AuthenticationError                     → 401 not_authenticated
        NotFoundError                           → 404 not_found
        RateLimitExceededError                  → 429 rate_limit_exceeded
        TranslationServiceError                 → 503 translation_service_error
        CircuitBreakerOpenError                 → 503 service_unavailable
        HiddenHeuError (base)                   → 500 internal_server_error
        Exception (fallback)                    → 500 internal_server_error

    Stack traces and internal context are only ever logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Schema failures answer 400 like every other bad input, not FastAPI's 422."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request data: %s", request_id_var.get(""), errors)
        return _error_response(400, "validation_error", "Invalid data", {"errors": errors})

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(400, "conflict", exc.message, exc.context)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error_response(401, "not_authenticated", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _error_response(
            429,
            "rate_limit_exceeded",
            exc.message,
            {"retry_after": exc.retry_after},
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(CircuitBreakerOpenError)
    async def handle_circuit_breaker(request: Request, exc: CircuitBreakerOpenError):
        logger.warning("[%s] Circuit breaker open: %s", request_id_var.get(""), exc.message)
        return _error_response(
            503,
            "service_unavailable",
            exc.message,
            {"recovery_time": exc.recovery_time},
            headers={"Retry-After": str(exc.recovery_time)},
        )

    @app.exception_handler(TranslationServiceError)
    async def handle_translation_error(request: Request, exc: TranslationServiceError):
        logger.error("[%s] Translation service error: %s", request_id_var.get(""), exc.message)
        headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after else None
        return _error_response(
            503, "translation_service_error", exc.message, exc.context, headers=headers
        )

    @app.exception_handler(HiddenHeuError)
    async def handle_application_error(request: Request, exc: HiddenHeuError):
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(
            500, "internal_server_error", "An unexpected error occurred. Please try again later."
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes and wrong methods, in the same body shape as everything else."""
        error = "not_found" if exc.status_code == 404 else "http_error"
        return _error_response(exc.status_code, error, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Assemble a fully configured FastAPI instance.

    Tests call this for a fresh app (and fresh rate limiter state) per test.
    """
    app = FastAPI(
        title="HiddenHeu API",
        description=(
            "Backend for HiddenHeu, a guide to lesser-known heritage sites across India: "
            "cities, places, reviews, favorites and narrated descriptions in Indian languages."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → RateLimit → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(cities.router)
    app.include_router(places.router)
    app.include_router(favorites.router)
    app.include_router(testimonials.router)
    app.include_router(translate.router)
    app.include_router(health.router)

    return app


app = create_app()
