"""Consume the event bus, log every event and keep a short history."""

import asyncio
from collections import deque

from core.event_bus import EventBus
from core.log import get_logger
from core.models.domain.events import (
    ChangeDetectedEvent,
    Event,
    LogEvent,
    TaskStatusChangedEvent,
)
from core.types import Severity, TaskState

logger = get_logger(__name__)

# Matches the number of log lines the operator view keeps
DEFAULT_HISTORY_SIZE = 100

_LOG_LEVELS = {
    Severity.DEBUG: logger.debug,
    Severity.INFO: logger.info,
    Severity.WARNING: logger.warning,
    Severity.ERROR: logger.error,
}


class EventRecorder:
    """The single consumer of an event bus."""

    def __init__(self, event_bus: EventBus, history_size: int = DEFAULT_HISTORY_SIZE):
        self.event_bus = event_bus
        self._history: deque[Event] = deque(maxlen=history_size)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start consuming in the background."""
        if self.running:
            logger.warning("Event recorder already running")
            return
        self._task = asyncio.create_task(self._consume(), name="event-recorder")

    async def stop(self) -> None:
        """Stop consuming, then record whatever is still queued."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None

        for event in self.event_bus.drain(max_items=self.event_bus.qsize()):
            self.record(event)

    def record(self, event: Event) -> None:
        """Log an event and add it to the history."""
        self._history.append(event)

        if isinstance(event, LogEvent):
            _LOG_LEVELS[event.severity](event.message)
        elif isinstance(event, TaskStatusChangedEvent):
            message = f"Task #{event.index + 1} status: {event.status}"
            if event.status.state == TaskState.ERROR:
                logger.warning(message)
            else:
                logger.info(message)
        elif isinstance(event, ChangeDetectedEvent):
            logger.info(f"Task #{event.index + 1} change: {event.change.message}")

    def snapshot(self, limit: int | None = None) -> list[Event]:
        """Recorded events, oldest first, limited to the most recent ones."""
        events = list(self._history)
        if limit is None or limit <= 0:
            return events
        return events[-limit:]

    def clear(self) -> None:
        self._history.clear()

    async def _consume(self) -> None:
        async for event in self.event_bus.events():
            self.record(event)
