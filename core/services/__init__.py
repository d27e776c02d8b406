"""Core services package."""

from .event_recorder import EventRecorder
from .watch_service import WatchService

__all__ = [
    "EventRecorder",
    "WatchService",
]
