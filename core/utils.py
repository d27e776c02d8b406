"""Utility functions for the application."""

from datetime import datetime

from core.log import get_logger

logger = get_logger(__name__)

# Values longer than this are diffed item by item when they look like lists
LONG_VALUE_THRESHOLD = 100
SHORT_VALUE_THRESHOLD = 60


def format_timestamp(timestamp_ms: int | float | None) -> str:
    """Format a millisecond epoch timestamp as local time.

    Args:
        timestamp_ms: Milliseconds since the epoch

    Returns:
        Time as ``YYYY-mm-dd HH:MM:SS`` or ``Time format error``
    """
    if timestamp_ms is None:
        return "Time format error"
    try:
        moment = datetime.fromtimestamp(int(timestamp_ms) // 1000)
    except (OverflowError, OSError, ValueError, TypeError):
        logger.error(f"Invalid timestamp: {timestamp_ms}")
        return "Time format error"
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def byte_length(text: str) -> int:
    """Length of text in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def diff_percentage(old: str, new: str) -> float:
    """Rough difference between two strings based on their lengths."""
    if not old and not new:
        return 0.0
    if not old or not new:
        return 100.0
    old_len = byte_length(old)
    new_len = byte_length(new)
    return abs(new_len - old_len) / max(old_len, new_len) * 100.0


def _split_items(value: str) -> list[str]:
    return [item.strip() for item in value.strip("[]").split(",")]


def describe_value_change(old: str, new: str) -> str:
    """Describe how an extracted value changed.

    Long comma separated values are compared item by item, short values
    are shown side by side, anything else is reported as updated.
    """
    if len(old) > LONG_VALUE_THRESHOLD or len(new) > LONG_VALUE_THRESHOLD:
        if "," in old and "," in new:
            old_items = _split_items(old)
            new_items = _split_items(new)
            added = [item for item in new_items if item not in old_items]
            removed = [item for item in old_items if item not in new_items]

            lines = []
            if added:
                lines.append(f"Added: {', '.join(added)}")
            if removed:
                lines.append(f"Removed: {', '.join(removed)}")
            if lines:
                return "\n".join(lines)
    elif (
        len(old) <= SHORT_VALUE_THRESHOLD
        and len(new) <= SHORT_VALUE_THRESHOLD
        and "\n" not in old
        and "\n" not in new
    ):
        return f"{old} -> {new}"

    return "Data updated"


def mask_key(key: str) -> str:
    """Mask a secret key, keeping a short prefix and suffix."""
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}{'*' * (len(key) - 8)}{key[-4:]}"
