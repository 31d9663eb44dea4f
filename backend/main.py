"""
FastAPI application factory for the Summit API.

    uvicorn backend.main:app --reload

Tests call ``create_app(settings=Settings(environment="test", _env_file=None))``
and override repository providers on the returned app.
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    # Create FastAPI app
    app = FastAPI(
        title="Summit API",
        description="Elevation, challenge and achievement tracking API",
        version="1.0.0",
    )

    # Configure CORS middleware
    _configure_cors(app, settings)

    # Include API routers
    _include_routers(app)

    # Log feature flags status
    _log_feature_flags(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
        )
        logger.info("Sentry initialized for summit-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        achievements_router,
        calculator_router,
        challenges_router,
        health_router,
        profile_router,
        progress_router,
        workouts_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(calculator_router)
    app.include_router(profile_router)
    app.include_router(workouts_router)
    app.include_router(challenges_router)
    app.include_router(achievements_router)
    app.include_router(progress_router)


def _log_feature_flags(settings: Settings) -> None:
    """Log the configuration status at startup."""
    if settings.supabase_url and settings.supabase_key:
        logger.info("Supabase persistence configured (summit-api)")
    else:
        logger.warning("Supabase credentials missing: persistence endpoints will return 503")

    if not settings.supabase_jwt_secret and not settings.api_keys_list:
        logger.warning("No SUPABASE_JWT_SECRET or API_KEYS configured: authenticated endpoints will reject all requests")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
