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
from sqlalchemy.ext.asyncio import AsyncEngine

from escolar.presentation.api.dependencies import close_auth_providers, get_engine
from escolar.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from escolar.presentation.api.routers import admin_router, auth_router
from escolar_config.settings import Settings, get_settings
from escolar_identity.infrastructure.persistence.sqlalchemy import create_tables


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Console output with timestamps and module names, the configured level
    for escolar modules and WARNING for noisy third-party libraries.
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("escolar").setLevel(log_level)
    logging.getLogger("escolar_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Sign-in and password management.

**Login identifiers:**
- Email (real or synthesized)
- National id (CPF), punctuation optional
- Student registration number (RA), e.g. `2024MS0042`

**First login:**
- Provisioned accounts must change their password before anything else
- `must_change_password` in the login response tells the client
""",
    },
    {
        "name": "Admin",
        "description": """Identity provisioning inside a school.

**Roles:**
- `admin`, `secretary`: staff, may provision and reset accounts
- `teacher`, `student`: provisioned by staff

**Synthesized logins:**
- Students without an email get a registration number and
  `{ra}@{school domain}`
- Other roles get a handle like `prof.maria.silva.2024.123456`

Generated passwords are returned once and never stored in plaintext.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting ABC Escolar API v%s...", API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    logger.info("Shutting down ABC Escolar API...")
    await engine.dispose()
    await close_auth_providers()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(admin_router, tags=["Admin"])

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

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description=(
            "Credential provisioning and sign-in for schools: "
            "**synthesized logins**, **first-login password change** and "
            "login by email, CPF or registration number."
        ),
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
    async def health_check() -> dict:
        """Health check endpoint, unversioned for load balancers."""
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "admin": f"{API_V1_PREFIX}/admin",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
