"""JSON API monitor."""

from typing import Any

from core.log import get_logger
from core.models.domain.change import Change
from core.utils import describe_value_change
from monitors.base import BaseMonitor
from monitors.extraction import extract_json_value

logger = get_logger(__name__)

MULTIPLE_MATCH_NOTE = (
    "Note: if the path matches several elements, the value combines all of them."
)


class ApiJsonMonitor(BaseMonitor):
    """Watch one value, selected by a path, in a JSON API response.

    A path that does not match is reported as a change on every check
    rather than raised as an error. Until the first match the start
    notice is repeated; after it the extraction failure is.
    """

    label = "API monitor"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.last_value: str | None = None

    @property
    def path(self) -> str:
        return self.config.extraction_rule or "(whole payload)"

    async def check(self) -> Change | None:
        payload = await self.fetch_json(self.config.endpoint)
        value = extract_json_value(payload, self.config.extraction_rule)

        if self.last_value is None:
            return self._start_change(value)

        if value is None:
            return self._extraction_failed_change()

        if value == self.last_value:
            return None

        old_value = self.last_value
        description = describe_value_change(old_value, value)
        logger.info(f"Detected change in API data at {self.config.endpoint}")
        logger.debug(f"Old value: {old_value}")
        logger.debug(f"New value: {value}")

        self.last_value = value
        return Change(
            message=f"{self.notes()} {description}",
            details=(
                f"Path: {self.path}\n\n"
                f"Changes:\n{description}\n\n"
                f"Current value:\n{value}\n\n"
                f"Previous value:\n{old_value}\n\n"
                f"{MULTIPLE_MATCH_NOTE}"
            ),
        )

    def _start_change(self, value: str | None) -> Change:
        if value is None:
            logger.debug(f"No initial match for {self.path} at {self.config.endpoint}")
            return Change(
                message=f"start: {self.notes()}",
                details=(
                    f"URL: {self.config.endpoint}\nPath: {self.path}\n\n"
                    "The path did not match any data. "
                    "Please check that it is correct."
                ),
            )

        logger.debug(f"Recording initial value for {self.config.endpoint}: {value}")
        self.last_value = value
        return Change(
            message=f"start: {self.notes()}",
            details=(
                f"Path: {self.path}\nInitial value: {value}\n\n"
                f"{MULTIPLE_MATCH_NOTE}"
            ),
        )

    def _extraction_failed_change(self) -> Change:
        logger.warning(f"Path {self.path} no longer matches at {self.config.endpoint}")
        return Change(
            message=f"{self.notes()} - Data extraction failed",
            details=(
                f"URL: {self.config.endpoint}\nPath: {self.path}\n\n"
                "The path did not match any data after a previous successful "
                "match. The data structure may have changed."
            ),
        )
