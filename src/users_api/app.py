"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api.dependencies import create_tables, get_engine
from users_api.exception_handlers import setup_exception_handlers
from users_api.routers import auth_router, users_router
from users_api.schemas.common import HealthResponse
from users_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging with:
    - Console output with timestamps and module names
    - Configurable log level for users_* modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("users_api", "users_auth", "users_identity", "users_config"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    for name in ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, activation and session management.

- Register with full name, email and password; an activation link is emailed
- Log in to obtain a session token (one active session per account)
- Log out or restore a forgotten password to revoke the current token
""",
    },
    {
        "name": "Users",
        "description": """Account management.

- Listing all accounts requires the admin role
- Accounts may update or delete themselves; admins may act on any account
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Users API v%s...", API_VERSION)
    engine = get_engine()
    try:
        await create_tables(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Users API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Account registration, activation, sessions and access control.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Unversioned for load balancer/monitoring compatibility."""
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
