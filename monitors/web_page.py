"""Web page monitor."""

from typing import Any

from core.log import get_logger
from core.models.domain.change import Change
from core.utils import byte_length, diff_percentage
from monitors.base import BaseMonitor
from monitors.extraction import page_title, select_fragment

logger = get_logger(__name__)


class WebPageMonitor(BaseMonitor):
    """Watch a page, or a CSS-selected part of it, for any change."""

    label = "Web page monitor"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.last_content: str | None = None
        self.last_title: str | None = None

    async def check(self) -> Change | None:
        html = await self.fetch_text(self.config.endpoint)
        content = select_fragment(html, self.config.extraction_rule)
        title = page_title(html)
        selector = self.config.extraction_rule or "(whole page)"

        if self.last_content is None:
            logger.debug(
                f"First content for {self.config.endpoint}: "
                f"{byte_length(content)} bytes"
            )
            self.last_content = content
            self.last_title = title
            return Change(
                message=f"start: {self.notes()}",
                details=(
                    f"URL: {self.config.endpoint}\n"
                    f"Selector: {selector}\n"
                    f"Captured {byte_length(content)} bytes"
                ),
            )

        if content == self.last_content:
            return None

        lines = []
        summary = "content updated"
        if title != self.last_title:
            lines.append(f"Title changed: '{self.last_title or ''}' -> '{title or ''}'")
            summary = "title changed"

        old_length = byte_length(self.last_content)
        new_length = byte_length(content)
        if old_length != new_length:
            delta = new_length - old_length
            percentage = diff_percentage(self.last_content, content)
            lines.append(
                f"Content length: {old_length} -> {new_length} bytes "
                f"({delta:+d}, {percentage:.1f}%)"
            )
            if summary == "content updated":
                summary = "content length changed"

        if not lines:
            lines.append("Content updated")

        logger.info(f"Detected change on {self.config.endpoint}: {summary}")
        self.last_content = content
        self.last_title = title
        return Change(
            message=f"{self.notes()} {summary}",
            details=f"URL: {self.config.endpoint}\nSelector: {selector}\n"
            + "\n".join(lines),
        )
