"""API routers package."""

from .common import router as common_router
from .events import router as events_router
from .notifications import router as notifications_router
from .tasks import router as tasks_router

__all__ = [
    "common_router",
    "events_router",
    "notifications_router",
    "tasks_router",
]
