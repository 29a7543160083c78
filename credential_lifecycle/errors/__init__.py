"""Error types and error logging helpers."""

from .handling import categorize_error, log_error
from .internal import (
    CredentialsMissing,
    InternalError,
    IssuanceFailed,
    NetworkError,
    ValidationFailed,
)

__all__ = [
    "CredentialsMissing",
    "InternalError",
    "IssuanceFailed",
    "NetworkError",
    "ValidationFailed",
    "categorize_error",
    "log_error",
]
