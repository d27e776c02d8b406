"""API request models."""

from pydantic import BaseModel, Field

from core.models.domain.task import TaskConfig


class TaskConfigRequest(TaskConfig):
    """Request model for creating or replacing a task."""


class NotificationSettingsRequest(BaseModel):
    """Request model for updating notification settings."""

    enable_server_chan: bool = Field(
        default=False, description="Deliver alerts through ServerChan"
    )
    server_chan_keys: list[str] = Field(
        default_factory=list, description="ServerChan send keys"
    )
