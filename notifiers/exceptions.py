"""Exceptions for notification delivery."""


class NotificationError(Exception):
    """Raised when a notification could not be delivered.

    Attributes:
        failures: Failure reason per key, empty for errors not tied to a key
    """

    def __init__(self, message: str, failures: dict[str, str] | None = None):
        super().__init__(message)
        self.failures = dict(failures or {})
