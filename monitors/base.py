"""Base class for source monitors."""

import json
from abc import ABC, abstractmethod
from typing import Any

import httpx

from core.config import Settings, settings as default_settings
from core.log import get_logger
from core.models.domain.change import Change
from core.models.domain.task import TaskConfig
from monitors.exceptions import FetchError, ParseError

logger = get_logger(__name__)


class BaseMonitor(ABC):
    """One fetch-and-compare strategy for a kind of source.

    A monitor owns its baseline. Each call to ``check`` performs one fetch,
    compares the result with the baseline and updates it.
    """

    label = "Monitor"

    def __init__(
        self,
        config: TaskConfig,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the monitor.

        Args:
            config: Task configuration this monitor was built from
            client: HTTP client to use; one is created and owned when omitted
            settings: Application settings, defaults to the global settings
        """
        self.config = config
        self.settings = settings or default_settings
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds),
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
        )

    def interval(self) -> int:
        """Seconds between two checks."""
        return self.config.interval_seconds

    def name(self) -> str:
        return f"{self.label} for {self.config.endpoint}"

    def notes(self) -> str:
        """Prefix used for every change message."""
        return self.config.alert_prefix

    @abstractmethod
    async def check(self) -> Change | None:
        """Run one fetch-and-compare cycle.

        Returns:
            The detected change, or None when nothing changed

        Raises:
            FetchError: If the source could not be reached
            ParseError: If the payload is malformed
            ExtractionError: If extraction failed in a way that is not a change
        """
        pass

    async def aclose(self) -> None:
        """Release the HTTP client if this monitor created it."""
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP {e.response.status_code} from {url}")
            raise FetchError(
                f"HTTP request failed, status code: {e.response.status_code}"
            ) from e

        except httpx.TimeoutException as e:
            logger.warning(f"Timeout requesting {url}")
            raise FetchError(f"Request timed out: {url}") from e

        except httpx.RequestError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise FetchError(f"Request failed: {e}") from e

    async def fetch_text(self, url: str) -> str:
        response = await self._request("GET", url)
        return response.text

    async def fetch_json(
        self, url: str, method: str = "GET", payload: Any | None = None
    ) -> Any:
        """Request a URL and decode its JSON body.

        Raises:
            FetchError: If the request fails
            ParseError: If the body is not JSON
        """
        if payload is None:
            response = await self._request(method, url)
        else:
            response = await self._request(method, url, json=payload)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to parse JSON response: {e}") from e
