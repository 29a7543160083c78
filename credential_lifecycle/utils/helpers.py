"""Helper functions for formatting and log-safe rendering."""

from __future__ import annotations

from ..constants import CLIENT_ID_LOG_PREFIX_LENGTH


def format_duration(total_seconds: int | float | None) -> str:
    """Return a human-friendly Hh Mm Ss string for a duration in seconds.

    Examples:
      65 -> "1m 5s"
      3605 -> "1h 0m 5s" (hours, minutes, seconds)
      59 -> "59s"
    """
    if total_seconds is None:
        return "unknown"
    seconds = int(total_seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes, sec = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {sec}s"
    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m {sec}s"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h {minutes}m {sec}s"


def mask_identifier(value: str | None, visible: int = CLIENT_ID_LOG_PREFIX_LENGTH) -> str:
    """Return the first ``visible`` characters of ``value`` followed by an ellipsis."""
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "..."
    return f"{value[:visible]}..."


def presence(value: object) -> str:
    return "Set" if value else "Not Set"
