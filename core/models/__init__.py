"""Unified models package for the watchpost service."""

# API models (request/response)
from core.models.api.requests import (
    NotificationSettingsRequest,
    TaskConfigRequest,
)
from core.models.api.responses import (
    EventListResponse,
    NotificationSettingsResponse,
    TaskActionResponse,
    TaskListResponse,
    TaskResponse,
)

# Domain models (core business logic)
from core.models.domain.app_config import AppConfig, NotificationConfig
from core.models.domain.change import Change
from core.models.domain.events import (
    ChangeDetectedEvent,
    Event,
    LogEvent,
    TaskStatusChangedEvent,
)
from core.models.domain.task import TaskConfig, TaskStats, TaskStatus

__all__ = [
    # Domain models
    "AppConfig",
    "Change",
    "ChangeDetectedEvent",
    "Event",
    "LogEvent",
    "NotificationConfig",
    "TaskConfig",
    "TaskStats",
    "TaskStatus",
    "TaskStatusChangedEvent",
    # API models
    "EventListResponse",
    "NotificationSettingsRequest",
    "NotificationSettingsResponse",
    "TaskActionResponse",
    "TaskConfigRequest",
    "TaskListResponse",
    "TaskResponse",
]
