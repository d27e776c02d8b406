"""Exceptions raised by source monitors."""


class MonitorError(Exception):
    """Base exception for monitor errors."""

    pass


class FetchError(MonitorError):
    """Raised on network failure, timeout or a non-success status."""

    pass


class ParseError(MonitorError):
    """Raised when a response body cannot be parsed."""

    pass


class ExtractionError(MonitorError):
    """Raised when a selector or path is invalid or matched nothing,
    or when an identifier field is malformed."""

    pass
