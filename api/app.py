"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import (
    common_router,
    events_router,
    notifications_router,
    tasks_router,
)
from core import get_logger, setup_logging
from core.config import Settings, load_settings
from core.services.watch_service import WatchService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    setup_logging(
        level=settings.log_level,
        enable_file_logging=settings.log_to_file,
        is_test_env=settings.is_testing,
    )
    logger.info(f"Starting Watchpost API server in {settings.environment} mode")

    watch_service = WatchService(settings)
    app.state.watch_service = watch_service
    await watch_service.start()

    logger.info("Watchpost API server initialized successfully")

    yield

    # Stop every poll loop before the process exits
    try:
        await watch_service.shutdown()
    except Exception as e:
        logger.error(f"Error stopping watch service: {e}")

    logger.info("Watchpost API server shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI app with the given or current settings."""
    settings = settings or load_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Control API for the Watchpost change monitor",
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(common_router)
    app.include_router(tasks_router)
    app.include_router(notifications_router)
    app.include_router(events_router)
    return app
