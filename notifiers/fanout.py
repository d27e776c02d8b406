"""Deliver one notification to every registered key."""

import asyncio
from collections.abc import Callable, Iterable

import httpx

from core.log import get_logger
from core.utils import mask_key
from notifiers.base import Notifier
from notifiers.exceptions import NotificationError
from notifiers.server_chan import DEFAULT_TIMEOUT, ServerChanNotifier

logger = get_logger(__name__)

NotifierFactory = Callable[[str], Notifier]


class NotificationFanout:
    """Send the same notification to a deduplicated set of keys.

    Every key is attempted even when some fail; the send succeeds only when
    all of them do.
    """

    def __init__(
        self,
        keys: Iterable[str] = (),
        notifier_factory: NotifierFactory | None = None,
    ):
        """Initialize the fanout.

        Args:
            keys: Initial delivery keys
            notifier_factory: Builds the notifier for a key, ServerChan by default
        """
        self._client: httpx.AsyncClient | None = None
        self._notifier_factory = notifier_factory or self._server_chan_notifier
        # Insertion ordered, one notifier per key
        self._notifiers: dict[str, Notifier] = {}
        for key in keys:
            self.add_key(key)

    def _server_chan_notifier(self, key: str) -> Notifier:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(DEFAULT_TIMEOUT))
        return ServerChanNotifier(key, client=self._client)

    @property
    def keys(self) -> list[str]:
        return list(self._notifiers)

    def __len__(self) -> int:
        return len(self._notifiers)

    def add_key(self, key: str) -> bool:
        """Register a key. Adding a known or blank key changes nothing.

        Returns:
            True if the key was new
        """
        key = key.strip()
        if not key or key in self._notifiers:
            return False
        self._notifiers[key] = self._notifier_factory(key)
        logger.info(f"Added notification key {mask_key(key)}")
        return True

    def remove_key(self, key: str) -> bool:
        """Unregister a key. Removing an unknown key changes nothing.

        Returns:
            True if the key was registered
        """
        if self._notifiers.pop(key.strip(), None) is None:
            return False
        logger.info(f"Removed notification key {mask_key(key.strip())}")
        return True

    def set_keys(self, keys: Iterable[str]) -> None:
        """Replace the key set, keeping notifiers for keys that stay."""
        wanted = [key.strip() for key in keys if key.strip()]
        for key in self.keys:
            if key not in wanted:
                self.remove_key(key)
        for key in wanted:
            self.add_key(key)

    async def send(self, title: str, body: str) -> None:
        """Deliver to every key.

        Raises:
            NotificationError: If no key is registered, or after all keys
                were attempted when at least one failed
        """
        if not self._notifiers:
            raise NotificationError("No notification keys configured")

        targets = list(self._notifiers.items())
        results = await asyncio.gather(
            *(notifier.send(title, body) for _, notifier in targets),
            return_exceptions=True,
        )

        failures: dict[str, str] = {}
        for (key, _), result in zip(targets, results):
            if isinstance(result, Exception):
                failures[key] = str(result) or type(result).__name__
                logger.warning(f"Delivery to {mask_key(key)} failed: {result}")
            elif isinstance(result, BaseException):
                raise result

        if failures:
            reasons = "; ".join(
                f"{mask_key(key)}: {reason}" for key, reason in failures.items()
            )
            raise NotificationError(
                f"Failed to deliver to {len(failures)} of {len(targets)} keys: "
                f"{reasons}",
                failures=failures,
            )

        logger.debug(f"Notification delivered to {len(targets)} keys: {title}")

    async def aclose(self) -> None:
        """Close notifiers and the shared HTTP client."""
        for notifier in self._notifiers.values():
            await notifier.aclose()
        if self._client is not None:
            await self._client.aclose()
            self._client = None
