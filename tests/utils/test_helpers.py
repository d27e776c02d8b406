"""Test helper utilities for watchpost tests."""

from typing import Any

from core.models.domain.change import Change
from core.models.domain.task import TaskConfig, TaskStatus
from core.types import Severity, SourceKind
from monitors.base import BaseMonitor
from notifiers.exceptions import NotificationError

# Small enough that loops cycle quickly in tests
FAST_INTERVAL = 0.01


def make_task_config(**overrides: Any) -> TaskConfig:
    """Create a TaskConfig with test defaults."""
    values: dict[str, Any] = {
        "name": "Test Task",
        "source_kind": SourceKind.WEB_PAGE,
        "endpoint": "http://localhost/page",
        "interval_seconds": 1,
        "notes": "Test Notes",
    }
    values.update(overrides)
    return TaskConfig(**values)


class FakeMonitor(BaseMonitor):
    """Monitor returning scripted outcomes, then None forever."""

    label = "Fake monitor"

    def __init__(
        self,
        config: TaskConfig,
        outcomes: list[Change | None | Exception] | None = None,
        interval: float = FAST_INTERVAL,
    ):
        super().__init__(config)
        self.outcomes = list(outcomes or [])
        self._interval = interval
        self.checks = 0
        self.closed = False

    def interval(self) -> Any:
        return self._interval

    async def check(self) -> Change | None:
        self.checks += 1
        if not self.outcomes:
            return None
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()


class RecordingNotifier:
    """Notifier that records sends and can be told to fail."""

    def __init__(self, key: str, fail: bool = False):
        self.key = key
        self.fail = fail
        self.sent: list[tuple[str, str]] = []
        self.closed = False

    async def send(self, title: str, body: str) -> None:
        self.sent.append((title, body))
        if self.fail:
            raise NotificationError("rejected")

    async def aclose(self) -> None:
        self.closed = True


class RecordingEmitter:
    """Collects what a poll loop reports."""

    def __init__(self) -> None:
        self.stopped = False
        self.statuses: list[TaskStatus] = []
        self.changes: list[Change] = []
        self.logs: list[tuple[str, Severity]] = []

    def status(self, status: TaskStatus) -> None:
        self.statuses.append(status)

    def change(self, change: Change) -> None:
        self.changes.append(change)

    def log(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.logs.append((message, severity))

    def active(self) -> bool:
        return not self.stopped
