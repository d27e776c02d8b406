"""FastAPI dependencies."""

from fastapi import Request

from core.config import Settings
from core.services.event_recorder import EventRecorder
from core.services.watch_service import WatchService


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_watch_service(request: Request) -> WatchService:
    """Get the watch service from app state."""
    service: WatchService = request.app.state.watch_service
    return service


def get_event_recorder(request: Request) -> EventRecorder:
    """Get the event recorder of the watch service."""
    service: WatchService = request.app.state.watch_service
    return service.recorder
