"""ServerChan push notification client."""

import json
import re
from typing import Any

import httpx

from core.log import get_logger
from notifiers.exceptions import NotificationError

logger = get_logger(__name__)

SERVER_CHAN_URL = "https://sctapi.ftqq.com/{key}.send"
SERVER_CHAN_TURBO_URL = "https://{num}.push.ft07.com/send/{key}.send"
DEFAULT_TIMEOUT = 30.0

_TURBO_KEY = re.compile(r"sctp(\d+)t")


def server_chan_url(key: str) -> str:
    """Send URL for a ServerChan key.

    Raises:
        NotificationError: If an ``sctp`` key has no numeric part
    """
    if key.startswith("sctp"):
        match = _TURBO_KEY.match(key)
        if match is None:
            raise NotificationError("ServerChan key format is incorrect")
        return SERVER_CHAN_TURBO_URL.format(num=match.group(1), key=key)
    return SERVER_CHAN_URL.format(key=key)


class ServerChanNotifier:
    """Send notifications through one ServerChan key."""

    def __init__(
        self,
        key: str,
        client: httpx.AsyncClient | None = None,
        url: str | None = None,
    ):
        """Initialize the notifier.

        Args:
            key: ServerChan send key
            client: HTTP client to use; one is created and owned when omitted
            url: Override for the send URL derived from the key
        """
        self.key = key.strip()
        self.url = url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(DEFAULT_TIMEOUT)
        )

    async def send(self, title: str, body: str) -> None:
        if not self.key:
            logger.error("ServerChan key not set, cannot send notification")
            raise NotificationError("ServerChan key not set")

        url = self.url or server_chan_url(self.key)
        logger.debug(f"Sending ServerChan notification: {title}")

        try:
            response = await self.client.post(url, data={"text": title, "desp": body})
            response.raise_for_status()
            result: Any = response.json()

        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Failed to send notification request, "
                f"status code: {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise NotificationError(
                f"Failed to send notification request: {e}"
            ) from e
        except json.JSONDecodeError as e:
            raise NotificationError(f"Failed to parse response: {e}") from e

        code = result.get("code") if isinstance(result, dict) else None
        if code != 0:
            message = result.get("message") if isinstance(result, dict) else result
            raise NotificationError(f"ServerChan returned error: {message}")

        logger.info(f"ServerChan notification sent: {title}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
