from __future__ import annotations

import logging

from ..logging_config import log_structured_error
from .internal import (
    CredentialsMissing,
    InternalError,
    IssuanceFailed,
    NetworkError,
    ValidationFailed,
)


def categorize_error(error: BaseException) -> str:
    """Map an exception onto the category tag used in structured log lines."""
    if isinstance(error, CredentialsMissing):
        return "config"
    if isinstance(error, IssuanceFailed):
        return "issuance"
    if isinstance(error, ValidationFailed):
        return "validation"
    if isinstance(error, NetworkError | OSError | ConnectionError | TimeoutError):
        return "network"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: Exception,
    context: dict | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    The error is categorised from its type and written as one structured
    line. Non-None values from ``InternalError.data`` join the context.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level to emit at.
    """
    merged = dict(context or {})
    if isinstance(error, InternalError):
        for key, value in error.data.items():
            if value is not None:
                merged.setdefault(key, value)
    log_structured_error(
        error_type=categorize_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
        level=level,
    )
