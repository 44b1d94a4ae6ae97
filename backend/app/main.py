"""
ProductHub Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app) or by `python -m app`.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌──────────┐  │
    │  │ Req ID   │→│ Logging  │→│ GZip   │→│  CORS    │  │
    │  └──────────┘ └──────────┘ └────────┘ └──────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /  /products  /users  /ratings  /categories        │
    │  /cart  /store-dashboard                            │
    │                                                     │
    │  Per-route fallbacks (routes/fallback.py), then:    │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ProductHubError→500 │ Exception→500          │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (MONGO_URI missing → startup aborts)
    MongoDB itself is connected lazily by the first request.

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import store
from app.exceptions import ProductHubError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import cart, categories, dashboard, health, products, ratings, users
from app.schemas.responses import ErrorResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once, before anything else logs.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Per-operation chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then configuration check. A missing MONGO_URI raises
    ConfigurationError here, which makes uvicorn abort startup with a
    non-zero exit code.

    Shutdown: close the shared MongoDB client.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("ProductHub Backend %s starting up...", __version__)

    try:
        settings.validate_required()
    except ProductHubError as e:
        logger.critical("%s", e.message)
        raise

    logger.info("Database: %s (connects on first request)", settings.mongo_db_name)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ProductHub Backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Last-resort handlers for errors that escape the per-route fallbacks.

    Every built-in route goes through guarded(), which already catches
    ProductHubError, so the first handler is only a safety net for handlers
    added without a fallback. The Exception handler covers genuine bugs.

    Handlers NEVER expose internal details in the response; the request ID
    links the response to the server-side log entry.
    """

    @app.exception_handler(ProductHubError)
    async def handle_app_error(request: Request, exc: ProductHubError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled %s: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="server_error",
                message="An internal error occurred. Please try again later.",
                request_id=rid,
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_server_error",
                message="An unexpected error occurred. Please try again or contact support.",
                request_id=rid,
            ).model_dump(),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="ProductHub API",
        description=(
            "REST gateway over the ProductHub MongoDB database: products, users, "
            "ratings, categories, carts and the seller dashboard."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(ratings.router)
    app.include_router(categories.router)
    app.include_router(cart.router)
    app.include_router(dashboard.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()
