"""Core exceptions."""


class WatchpostError(Exception):
    """Base exception for watchpost errors."""

    pass


class ConfigurationError(WatchpostError):
    """Raised when a task or application configuration is unusable."""

    pass
