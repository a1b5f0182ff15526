"""FastAPI application factory.

Main entry point for the Training Platform Web API. Run with:

    uvicorn --factory training.web.api:create_app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from training import __version__
from training.config.app_config import AppConfig, load_app_config
from training.core.services import TrainingPlatform, build_platform
from training.web.errors import register_exception_handlers
from training.web.routes import (
    auth_router,
    health_router,
    modules_router,
    profile_router,
    progress_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    platform: TrainingPlatform = app.state.platform
    logger.info(
        "api_startup",
        storage=platform.config.storage.backend,
        modules=[m.id for m in platform.catalog.list_modules()],
        token_ttl_hours=platform.config.auth.token_ttl_hours,
    )
    yield
    logger.info("api_shutdown")


def create_app(
    config: AppConfig | None = None,
    platform: TrainingPlatform | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config (loaded from data/config if None)
        platform: Prebuilt services, mainly for tests (built from config if None)

    Returns:
        Configured FastAPI app instance
    """
    if platform is None:
        platform = build_platform(config or load_app_config())

    app = FastAPI(
        title="Training Platform API",
        description="Accounts, bearer tokens and course progress tracking",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.platform = platform

    # CORS middleware for the browser frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=platform.config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(progress_router)
    app.include_router(modules_router)

    return app
