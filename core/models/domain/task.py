"""Task management domain models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.types import SourceKind, TaskState

# Field names written by earlier releases of the config file
LEGACY_FIELD_NAMES: dict[str, str] = {
    "task_type": "source_kind",
    "selector": "extraction_rule",
    "interval_secs": "interval_seconds",
    "monitor_spot": "watch_spot",
    "monitor_contract": "watch_derivatives",
}


class TaskConfig(BaseModel):
    """Description of one monitoring job.

    Immutable: edits replace the whole config, and a running task has to be
    restarted to pick up the new one.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="New Task", description="Display name")
    source_kind: SourceKind = Field(description="Kind of source to watch")
    endpoint: str = Field(
        min_length=1, description="URL to poll or account address to watch"
    )
    extraction_rule: str = Field(
        default="",
        description="CSS selector or JSON path; empty means the whole payload",
    )
    interval_seconds: int = Field(default=60, ge=1, description="Poll interval")
    enabled: bool = Field(default=False, description="Start with the service")
    notes: str = Field(default="", description="Prefix used in alert titles")
    watch_spot: bool = Field(default=True, description="Watch spot trades")
    watch_derivatives: bool = Field(
        default=True, description="Watch derivative positions"
    )

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        upgraded = dict(data)
        for old, new in LEGACY_FIELD_NAMES.items():
            if old in upgraded:
                value = upgraded.pop(old)
                upgraded.setdefault(new, value)

        # Old configs stored both a url and an address on every task
        url = upgraded.pop("url", None)
        address = upgraded.pop("address", None)
        if "endpoint" not in upgraded and "source_kind" in upgraded:
            kind = SourceKind.parse(upgraded["source_kind"])
            endpoint = address if kind == SourceKind.EXCHANGE_ACCOUNT else url
            if endpoint is not None:
                upgraded["endpoint"] = endpoint
        return upgraded

    @field_validator("source_kind", mode="before")
    @classmethod
    def _parse_source_kind(cls, value: Any) -> SourceKind:
        return SourceKind.parse(value)

    @field_validator("endpoint", "extraction_rule")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @property
    def alert_prefix(self) -> str:
        """Notes used to prefix alerts, falling back to the endpoint."""
        return self.notes.strip() or self.endpoint


class TaskStatus(BaseModel):
    """Current status of a task as seen by the supervisor."""

    model_config = ConfigDict(frozen=True)

    state: TaskState = TaskState.IDLE
    reason: str | None = None

    @classmethod
    def idle(cls) -> "TaskStatus":
        return cls(state=TaskState.IDLE)

    @classmethod
    def running(cls) -> "TaskStatus":
        return cls(state=TaskState.RUNNING)

    @classmethod
    def error(cls, reason: str) -> "TaskStatus":
        return cls(state=TaskState.ERROR, reason=reason)

    def __str__(self) -> str:
        if self.reason:
            return f"{self.state.value}: {self.reason}"
        return self.state.value


class TaskStats(BaseModel):
    """Statistics for one poll loop."""

    executions: int = 0
    errors: int = 0
    consecutive_errors: int = 0
    changes: int = 0
    last_execution_time: datetime | None = None
    last_error_time: datetime | None = None
    last_change_time: datetime | None = None
    start_time: datetime | None = None
