"""HTTP client for token validation and client-credentials issuance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from ..constants import (
    API_BASE_URL,
    TOKEN_ISSUANCE_PATH,
    TOKEN_ISSUANCE_TIMEOUT_SECONDS,
    TOKEN_VALIDATION_PATH,
    TOKEN_VALIDATION_TIMEOUT_SECONDS,
)
from ..errors.internal import IssuanceFailed, NetworkError, ValidationFailed
from ..utils import format_duration, mask_identifier


@dataclass(frozen=True)
class IssuedToken:
    """Access token returned by the issuance endpoint.

    Attributes:
        access_token: The bearer token.
        expires_in: Lifetime in seconds as reported upstream, if any.
        token_type: Token type as reported upstream, if any.
    """

    access_token: str
    expires_in: int | None = None
    token_type: str | None = None

    def __repr__(self) -> str:
        return f"IssuedToken(expires_in={self.expires_in}, token_type={self.token_type})"


async def _read_payload(resp: Any) -> Any:
    try:
        return await resp.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        return await resp.text(errors="replace")


class TokenClient:
    """Client for the upstream token endpoints.

    Wraps every aiohttp / JSON failure in the internal error hierarchy so the
    rotation logic only ever deals with ValidationFailed and IssuanceFailed.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        base_url: str = API_BASE_URL,
        *,
        validation_timeout: float = TOKEN_VALIDATION_TIMEOUT_SECONDS,
        issuance_timeout: float = TOKEN_ISSUANCE_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the token client.

        Args:
            http_session: HTTP session for making requests.
            base_url: Upstream API root, without trailing slash.
            validation_timeout: Total timeout in seconds for one validation probe.
            issuance_timeout: Total timeout in seconds for one issuance call.
        """
        self.session = http_session
        self.base_url = base_url.rstrip("/")
        self.validation_timeout = validation_timeout
        self.issuance_timeout = issuance_timeout

    @property
    def validation_url(self) -> str:
        return f"{self.base_url}{TOKEN_VALIDATION_PATH}"

    @property
    def issuance_url(self) -> str:
        return f"{self.base_url}{TOKEN_ISSUANCE_PATH}"

    async def check_token(self, access_token: str) -> None:
        """Probe the upstream API with ``access_token`` as bearer credential.

        Returns normally only on HTTP 200.

        Raises:
            ValidationFailed: On any other status, a timeout or a transport error.
        """
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.validation_timeout)
        try:
            try:
                async with self.session.get(
                    self.validation_url, headers=headers, timeout=timeout
                ) as resp:
                    if resp.status == 200:
                        return
                    raise ValidationFailed(
                        f"Token rejected (status={resp.status})", status=resp.status
                    )
            except TimeoutError as e:
                raise NetworkError(
                    f"Token validation timeout after {self.validation_timeout}s"
                ) from e
            except aiohttp.ClientError as e:
                raise NetworkError(f"Network error during validation: {e}") from e
        except NetworkError as e:
            raise ValidationFailed(str(e)) from e

    async def issue_token(self, client_id: str, client_secret: str) -> IssuedToken:
        """Exchange client credentials for a freshly issued access token.

        Args:
            client_id: Client id.
            client_secret: Client secret.

        Returns:
            The issued token with its reported lifetime.

        Raises:
            IssuanceFailed: On a non-200 status, a malformed body, a timeout
                or a transport error.
        """
        body = {"clientId": client_id, "clientSecret": client_secret}
        headers = {"Content-Type": "application/json"}
        timeout = aiohttp.ClientTimeout(total=self.issuance_timeout)
        logging.info(f"🔄 Generating new token from {self.issuance_url}")
        logging.debug(f"   Using client id {mask_identifier(client_id)}")
        try:
            async with self.session.post(
                self.issuance_url, json=body, headers=headers, timeout=timeout
            ) as resp:
                payload = await _read_payload(resp)
                if resp.status != 200:
                    raise IssuanceFailed(
                        f"Token issuance rejected (status={resp.status})",
                        status=resp.status,
                        payload=payload,
                    )
        except TimeoutError as e:
            raise IssuanceFailed(
                f"Token issuance timeout after {self.issuance_timeout}s (url={self.issuance_url})"
            ) from e
        except aiohttp.ClientError as e:
            raise IssuanceFailed(
                f"No response from issuance endpoint: {type(e).__name__}: {e} (url={self.issuance_url})"
            ) from e
        return self._parse_issued(payload)

    @staticmethod
    def _parse_issued(payload: Any) -> IssuedToken:
        if not isinstance(payload, dict):
            raise IssuanceFailed(
                "Token issuance returned a non-JSON body", status=200, payload=payload
            )
        access_token = payload.get("accessToken")
        if not isinstance(access_token, str) or not access_token:
            raise IssuanceFailed(
                "Missing accessToken in issuance response",
                status=200,
                payload={k: v for k, v in payload.items() if k != "accessToken"},
            )
        expires_in = payload.get("expiresIn")
        if not isinstance(expires_in, int) or isinstance(expires_in, bool):
            expires_in = None
        token_type = payload.get("tokenType")
        logging.info(
            f"✅ Generated new token (lifetime {format_duration(expires_in)}) "
            f"expires_in={expires_in} token_type={token_type}"
        )
        return IssuedToken(access_token, expires_in, token_type if isinstance(token_type, str) else None)
