"""Per-task polling loop."""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Protocol

from core.log import get_logger
from core.models.domain.change import Change
from core.models.domain.task import TaskStats, TaskStatus
from core.types import Severity
from monitors.base import BaseMonitor
from notifiers.exceptions import NotificationError
from notifiers.fanout import NotificationFanout

logger = get_logger(__name__)


class LoopState(Enum):
    """Where a poll loop is in its cycle."""

    AWAITING_FIRST_CHECK = "awaiting_first_check"
    STEADY_POLLING = "steady_polling"
    BACKOFF = "backoff"
    CANCELLED = "cancelled"


class LoopEmitter(Protocol):
    """Receives what a poll loop reports."""

    def status(self, status: TaskStatus) -> None:
        ...

    def change(self, change: Change) -> None:
        ...

    def log(self, message: str, severity: Severity = Severity.INFO) -> None:
        ...

    def active(self) -> bool:
        """False once the loop has been stopped or replaced."""
        ...


class PollLoop:
    """Check a monitor on a timer and forward what it finds.

    The first check runs immediately. Every check is followed by a sleep of
    one interval; after a failed check that sleep is the backoff. The loop
    only ends when its task is cancelled.
    """

    def __init__(
        self,
        monitor: BaseMonitor,
        fanout: NotificationFanout,
        emitter: LoopEmitter,
    ):
        self.monitor = monitor
        self.fanout = fanout
        self.emitter = emitter
        self.state = LoopState.AWAITING_FIRST_CHECK
        self.stats = TaskStats()
        self._failing = False
        self._closed = False

    async def run(self) -> None:
        """Poll until cancelled, then release the monitor."""
        self.stats.start_time = datetime.now()
        logger.info(f"Poll loop started: {self.monitor.name()}")

        try:
            while True:
                await self.check_once()
                await asyncio.sleep(self.monitor.interval())

        except asyncio.CancelledError:
            self.state = LoopState.CANCELLED
            logger.info(f"Poll loop cancelled: {self.monitor.name()}")
            raise

        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Release the monitor. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            await self.monitor.aclose()
        except Exception as e:
            logger.error(f"Error closing {self.monitor.name()}: {e}")

    async def check_once(self) -> Change | None:
        """Run one check and report its outcome.

        Returns:
            The detected change, if any
        """
        self.stats.executions += 1
        self.stats.last_execution_time = datetime.now()

        try:
            change = await self.monitor.check()
        except Exception as e:
            self._record_failure(e)
            return None

        self.state = LoopState.STEADY_POLLING
        self.stats.consecutive_errors = 0
        if self._failing:
            self._failing = False
            self.emitter.status(TaskStatus.running())

        if change is None:
            self.emitter.log(f"{self.monitor.notes()}: no changes", Severity.DEBUG)
            return None

        self.stats.changes += 1
        self.stats.last_change_time = datetime.now()
        logger.info(f"Change detected: {change.message}")
        self.emitter.change(change)
        await self._notify(change)
        return change

    def _record_failure(self, error: Exception) -> None:
        self.state = LoopState.BACKOFF
        self.stats.errors += 1
        self.stats.consecutive_errors += 1
        self.stats.last_error_time = datetime.now()
        self._failing = True

        logger.warning(
            f"Check failed for {self.monitor.name()}, "
            f"retrying in {self.monitor.interval()}s: {error}"
        )
        self.emitter.status(TaskStatus.error(str(error) or type(error).__name__))

    async def _notify(self, change: Change) -> None:
        if not self.emitter.active():
            return

        if len(self.fanout) == 0:
            self.emitter.log(
                f"Notifications disabled, not sending: {change.message}",
                Severity.DEBUG,
            )
            return

        try:
            await self.fanout.send(change.message, change.details)
            self.emitter.log(f"Notification sent: {change.message}")
        except NotificationError as e:
            self.emitter.log(
                f"Failed to send notification for {self.monitor.notes()}: {e}",
                Severity.ERROR,
            )
