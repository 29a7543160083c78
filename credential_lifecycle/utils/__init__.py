"""Utility functions package.

Exposed functions:
    format_duration: Formats time durations into human-readable strings.
    mask_identifier: Truncates identifiers before they reach the logs.
    presence: Renders a Set / Not Set marker for a configured value.
"""

from .helpers import format_duration, mask_identifier, presence

__all__ = ["format_duration", "mask_identifier", "presence"]
