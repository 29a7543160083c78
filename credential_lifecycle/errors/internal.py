"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures the rotation
decision tree has to contain. Raw aiohttp / JSON errors never leave the HTTP
client; they are wrapped in one of the classes below.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport level failure (connect, reset, timeout).
  ValidationFailed     – A token was not accepted by the remote service.
  CredentialsMissing   – Issuance attempted without client id / secret.
  IssuanceFailed       – Token exchange rejected, malformed or unreachable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Connection failures, resets and timeouts end up here before being
    folded into one of the credential specific errors.
    """


class ValidationFailed(InternalError):
    """Raised by the HTTP client when a token is not accepted.

    Never escapes the validator: it is always degraded to ``False``.

    Args:
        message: Error message.
        status: HTTP status returned by the probe, ``None`` on transport errors.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message, data={"status": status})
        self.status = status


class CredentialsMissing(InternalError):
    """Raised when token issuance is attempted without client credentials."""


class IssuanceFailed(InternalError):
    """Raised when the token exchange does not yield an access token.

    Args:
        message: Error message.
        status: Upstream HTTP status, ``None`` for transport failures.
        payload: Upstream response body (parsed JSON or raw text), if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message, data={"status": status, "payload": payload})
        self.status = status
        self.payload = payload


__all__ = [
    "InternalError",
    "NetworkError",
    "ValidationFailed",
    "CredentialsMissing",
    "IssuanceFailed",
]
