"""Common API endpoints router."""

import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_settings, get_watch_service
from core import get_logger
from core.config import Settings
from core.services.watch_service import WatchService

logger = get_logger(__name__)

router = APIRouter(tags=["common"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: str
    tasks: int
    running_tasks: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    service: WatchService = Depends(get_watch_service),
) -> HealthResponse:
    """Health check endpoint."""
    supervisor = service.supervisor
    return HealthResponse(
        status="healthy",
        version=settings.api_version,
        timestamp=datetime.datetime.now().isoformat(),
        tasks=len(supervisor),
        running_tasks=sum(
            1 for index in range(len(supervisor)) if supervisor.is_running(index)
        ),
    )
