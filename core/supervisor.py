"""Supervisor that owns task configurations and their poll loops."""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import partial

from core.config import Settings
from core.event_bus import EventBus
from core.exceptions import ConfigurationError
from core.log import get_logger
from core.models.domain.change import Change
from core.models.domain.events import (
    ChangeDetectedEvent,
    Event,
    LogEvent,
    TaskStatusChangedEvent,
)
from core.models.domain.task import TaskConfig, TaskStats, TaskStatus
from core.poll_loop import PollLoop
from core.types import Severity, TaskState
from monitors.base import BaseMonitor
from monitors.factory import build_monitor
from notifiers.fanout import NotificationFanout

logger = get_logger(__name__)

MonitorFactory = Callable[[TaskConfig], BaseMonitor]


@dataclass(eq=False)
class TaskRuntimeState:
    """Runtime bookkeeping for one configured task."""

    status: TaskStatus = field(default_factory=TaskStatus.idle)
    task: asyncio.Task[None] | None = None
    loop: PollLoop | None = None
    # Bumped whenever the bound loop changes; stale emitters go quiet
    generation: int = 0


class _TaskEmitter:
    """Routes one poll loop's reports onto the event bus.

    Resolves the task's current index on every write, and drops writes once
    the loop it was created for is no longer bound.
    """

    def __init__(
        self,
        supervisor: "TaskSupervisor",
        runtime: TaskRuntimeState,
        generation: int,
    ):
        self._supervisor = supervisor
        self._runtime = runtime
        self._generation = generation

    def _index(self) -> int | None:
        if not self.active():
            return None
        return self._supervisor._index_of(self._runtime)

    def active(self) -> bool:
        return self._runtime.generation == self._generation

    def status(self, status: TaskStatus) -> None:
        if self._index() is not None:
            self._supervisor._set_status(self._runtime, status)

    def change(self, change: Change) -> None:
        index = self._index()
        if index is not None:
            self._supervisor._publish(ChangeDetectedEvent(index=index, change=change))

    def log(self, message: str, severity: Severity = Severity.INFO) -> None:
        index = self._index()
        if index is not None:
            self._supervisor._publish(
                LogEvent(message=f"Task #{index + 1}: {message}", severity=severity)
            )


class TaskSupervisor:
    """Start, stop and edit monitoring tasks.

    Configurations and runtime states are kept in two index-aligned lists.
    Operations on an index that does not exist do nothing. Start, stop and
    edits run one at a time so a task never has more than one poll loop.
    """

    def __init__(
        self,
        configs: Iterable[TaskConfig],
        fanout: NotificationFanout,
        event_bus: EventBus,
        monitor_factory: MonitorFactory | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the supervisor.

        Args:
            configs: Initial task configurations, in display order
            fanout: Notification fanout shared by every poll loop
            event_bus: Bus receiving log, status and change events
            monitor_factory: Builds a fresh monitor for a configuration
            settings: Settings handed to the default monitor factory
        """
        self._configs: list[TaskConfig] = list(configs)
        self._runtimes: list[TaskRuntimeState] = [
            TaskRuntimeState() for _ in self._configs
        ]
        self._fanout = fanout
        self._event_bus = event_bus
        self._monitor_factory = monitor_factory or partial(
            build_monitor, settings=settings
        )
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._configs)

    @property
    def configs(self) -> list[TaskConfig]:
        return list(self._configs)

    @property
    def statuses(self) -> list[TaskStatus]:
        return [runtime.status for runtime in self._runtimes]

    def state(self, index: int) -> TaskStatus | None:
        """Current status of a task, None for an unknown index."""
        if not self._in_range(index):
            return None
        return self._runtimes[index].status

    def is_running(self, index: int) -> bool:
        return self._in_range(index) and self._runtimes[index].task is not None

    def stats(self, index: int) -> TaskStats | None:
        """Statistics of the task's most recent poll loop."""
        if not self._in_range(index) or self._runtimes[index].loop is None:
            return None
        return self._runtimes[index].loop.stats

    async def start(self, index: int) -> bool:
        """Start a task, restarting it if it is already running.

        Returns:
            True if a poll loop was spawned
        """
        async with self._lock:
            return await self._start(index)

    async def _start(self, index: int) -> bool:
        if not self._in_range(index):
            self._publish(
                LogEvent(
                    message=f"Cannot start task #{index + 1}: no such task",
                    severity=Severity.WARNING,
                )
            )
            return False

        runtime = self._runtimes[index]
        if runtime.task is not None:
            await self._cancel(runtime)

        config = self._configs[index]
        try:
            monitor = self._monitor_factory(config)
        except ConfigurationError as e:
            logger.error(f"Cannot build monitor for {config.name}: {e}")
            if runtime.status.state != TaskState.IDLE:
                self._set_status(runtime, TaskStatus.idle())
            self._publish(
                LogEvent(
                    message=f"Failed to start task #{index + 1} ({config.name}): {e}",
                    severity=Severity.ERROR,
                )
            )
            return False

        runtime.generation += 1
        emitter = _TaskEmitter(self, runtime, runtime.generation)
        runtime.loop = PollLoop(monitor, self._fanout, emitter)
        runtime.task = asyncio.create_task(
            runtime.loop.run(), name=f"poll-loop-{config.name}"
        )

        self._set_status(runtime, TaskStatus.running())
        self._publish(LogEvent(message=f"Started task #{index + 1}: {config.name}"))
        logger.info(f"Started task #{index + 1}: {monitor.name()}")
        return True

    async def stop(self, index: int) -> bool:
        """Stop a task. Does nothing if it is not running.

        Returns:
            True if a running loop was stopped
        """
        async with self._lock:
            return await self._stop(index)

    async def _stop(self, index: int) -> bool:
        if not self._in_range(index):
            return False

        runtime = self._runtimes[index]
        if runtime.task is None:
            return False

        await self._cancel(runtime)
        self._set_status(runtime, TaskStatus.idle())
        self._publish(
            LogEvent(message=f"Stopped task #{index + 1}: {self._configs[index].name}")
        )
        logger.info(f"Stopped task #{index + 1}")
        return True

    async def stop_all(self) -> None:
        """Stop every running task."""
        async with self._lock:
            for index in range(len(self._runtimes)):
                await self._stop(index)

    async def start_enabled(self) -> int:
        """Start every task marked as enabled.

        Returns:
            Number of tasks started
        """
        started = 0
        for index, config in enumerate(self._configs):
            if config.enabled and await self.start(index):
                started += 1
        return started

    def add(self, config: TaskConfig) -> int:
        """Append a task. It starts stopped.

        Returns:
            Index of the new task
        """
        self._configs.append(config)
        self._runtimes.append(TaskRuntimeState())
        logger.info(f"Added task #{len(self._configs)}: {config.name}")
        return len(self._configs) - 1

    async def update(self, index: int, config: TaskConfig) -> bool:
        """Replace a task's configuration, stopping it first."""
        async with self._lock:
            if not self._in_range(index):
                return False

            await self._stop(index)
            self._configs[index] = config
            logger.info(f"Updated task #{index + 1}: {config.name}")
            return True

    async def delete(self, index: int) -> bool:
        """Remove a task, stopping it first. Later tasks shift down by one."""
        async with self._lock:
            if not self._in_range(index):
                return False

            await self._stop(index)
            config = self._configs.pop(index)
            self._runtimes.pop(index)
            logger.info(f"Deleted task #{index + 1}: {config.name}")
            return True

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._configs)

    def _index_of(self, runtime: TaskRuntimeState) -> int | None:
        for index, candidate in enumerate(self._runtimes):
            if candidate is runtime:
                return index
        return None

    def _publish(self, event: Event) -> None:
        self._event_bus.publish(event)

    def _set_status(self, runtime: TaskRuntimeState, status: TaskStatus) -> None:
        runtime.status = status
        index = self._index_of(runtime)
        if index is not None:
            self._publish(TaskStatusChangedEvent(index=index, status=status))

    async def _cancel(self, runtime: TaskRuntimeState) -> None:
        task = runtime.task
        runtime.generation += 1
        runtime.task = None
        if task is None:
            return

        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only the loop's own cancellation is expected here
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        except Exception as e:
            logger.error(f"Poll loop ended with an error: {e}")
        finally:
            # A loop cancelled before its first step never reaches its cleanup
            if runtime.loop is not None:
                await runtime.loop.aclose()
