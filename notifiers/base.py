"""Notifier interface."""

from typing import Protocol


class Notifier(Protocol):
    """Delivers one notification to one target."""

    async def send(self, title: str, body: str) -> None:
        """Deliver a notification.

        Raises:
            NotificationError: If delivery failed
        """
        ...

    async def aclose(self) -> None:
        ...
