"""Core functionality for the watchpost service."""

from .config import Settings, load_settings, settings
from .exceptions import ConfigurationError, WatchpostError
from .log import (
    get_logger,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .types import Environment, Severity, SourceKind, TaskState

__all__ = [
    "ConfigurationError",
    "Environment",
    "Settings",
    "Severity",
    "SourceKind",
    "TaskState",
    "WatchpostError",
    "get_logger",
    "load_settings",
    "settings",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
]
