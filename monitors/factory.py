"""Build monitors from task configurations."""

import httpx

from core.config import Settings
from core.exceptions import ConfigurationError
from core.log import get_logger
from core.models.domain.task import TaskConfig
from core.types import SourceKind
from monitors.api_json import ApiJsonMonitor
from monitors.base import BaseMonitor
from monitors.exchange_account import ExchangeAccountMonitor
from monitors.web_page import WebPageMonitor

logger = get_logger(__name__)


def build_monitor(
    config: TaskConfig,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> BaseMonitor:
    """Create a fresh monitor, with an empty baseline, for a task.

    Raises:
        ConfigurationError: If the source kind has no monitor
    """
    match config.source_kind:
        case SourceKind.WEB_PAGE:
            monitor_class: type[BaseMonitor] = WebPageMonitor
        case SourceKind.API_JSON:
            monitor_class = ApiJsonMonitor
        case SourceKind.EXCHANGE_ACCOUNT:
            monitor_class = ExchangeAccountMonitor
        case _:
            raise ConfigurationError(
                f"Unsupported source kind: {config.source_kind!r}"
            )

    logger.debug(f"Building {monitor_class.__name__} for {config.endpoint}")
    return monitor_class(config, client=client, settings=settings)
