"""Events published by poll loops and the supervisor."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from core.models.domain.change import Change
from core.models.domain.task import TaskStatus
from core.types import Severity


class LogEvent(BaseModel):
    """Free-form log line for observers."""

    model_config = ConfigDict(frozen=True)

    type: Literal["log"] = "log"
    message: str
    severity: Severity = Severity.INFO
    timestamp: datetime = Field(default_factory=datetime.now)


class TaskStatusChangedEvent(BaseModel):
    """A task moved to a new status."""

    model_config = ConfigDict(frozen=True)

    type: Literal["task_status_changed"] = "task_status_changed"
    index: int
    status: TaskStatus
    timestamp: datetime = Field(default_factory=datetime.now)


class ChangeDetectedEvent(BaseModel):
    """A task's monitor reported a change."""

    model_config = ConfigDict(frozen=True)

    type: Literal["change_detected"] = "change_detected"
    index: int
    change: Change
    timestamp: datetime = Field(default_factory=datetime.now)


Event = Annotated[
    LogEvent | TaskStatusChangedEvent | ChangeDetectedEvent,
    Field(discriminator="type"),
]
