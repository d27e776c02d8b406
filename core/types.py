"""Common type definitions for the watchpost service."""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class SourceKind(str, Enum):
    """Kind of source a monitoring task watches."""

    WEB_PAGE = "web_page"
    API_JSON = "api_json"
    EXCHANGE_ACCOUNT = "exchange_account"

    @classmethod
    def parse(cls, value: "str | SourceKind") -> "SourceKind":
        """Parse a kind from its value or from a legacy config name.

        Raises:
            ValueError: If the name matches no known kind
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip()
        legacy = LEGACY_SOURCE_KINDS.get(normalized)
        if legacy is not None:
            return legacy
        return cls(normalized.lower())


# Task type names written by earlier releases of the config file
LEGACY_SOURCE_KINDS: dict[str, SourceKind] = {
    "StaticMonitor": SourceKind.WEB_PAGE,
    "ApiMonitor": SourceKind.API_JSON,
    "HyperliquidMonitor": SourceKind.EXCHANGE_ACCOUNT,
}


class TaskState(str, Enum):
    """Lifecycle state of a monitoring task."""

    IDLE = "idle"
    RUNNING = "running"
    ERROR = "error"


class Severity(str, Enum):
    """Severity of a log event published on the event bus."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
