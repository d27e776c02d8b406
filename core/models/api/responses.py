"""API response models."""

from pydantic import BaseModel, Field

from core.models.domain.events import Event
from core.models.domain.task import TaskConfig, TaskStats, TaskStatus


class TaskResponse(BaseModel):
    """Response model for a single task."""

    index: int
    config: TaskConfig
    status: TaskStatus
    running: bool = False
    stats: TaskStats | None = None


class TaskListResponse(BaseModel):
    """Response model for the task list."""

    tasks: list[TaskResponse] = Field(default_factory=list)
    total_count: int = 0


class TaskActionResponse(BaseModel):
    """Response model for start/stop/delete actions."""

    index: int | None = None
    status: TaskStatus | None = None
    message: str


class NotificationSettingsResponse(BaseModel):
    """Notification settings with keys masked."""

    enable_server_chan: bool
    server_chan_keys: list[str] = Field(default_factory=list)
    key_count: int = 0


class EventListResponse(BaseModel):
    """Recent events, oldest first."""

    events: list[Event] = Field(default_factory=list)
    dropped: int = 0
