"""Bounded event channel from poll loops to a single observer."""

import asyncio
from collections.abc import AsyncIterator

from core.log import get_logger
from core.models.domain.events import Event

logger = get_logger(__name__)


class EventBus:
    """Ordered, bounded queue of events.

    Producers never wait: when the queue is full the event is dropped and
    counted, so a slow consumer cannot hold up a poll loop.
    """

    def __init__(self, max_size: int = 1000) -> None:
        self._queue: asyncio.Queue[Event] = asyncio.Queue(maxsize=max_size)
        self.dropped = 0

    def publish(self, event: Event) -> bool:
        """Queue an event without waiting.

        Returns:
            False when the event was dropped because the queue is full
        """
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                f"Event bus full, dropped {event.type} event "
                f"({self.dropped} dropped so far)"
            )
            return False
        return True

    async def get(self) -> Event:
        """Wait for the next event."""
        return await self._queue.get()

    def drain(self, max_items: int = 100) -> list[Event]:
        """Take up to max_items queued events without waiting."""
        events: list[Event] = []
        for _ in range(max_items):
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                break
        return events

    async def events(self) -> AsyncIterator[Event]:
        """Iterate over events as they arrive."""
        while True:
            yield await self._queue.get()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()
