"""Token issuance from client credentials."""

from __future__ import annotations

import logging

from ..config.model import CredentialConfig
from ..errors.internal import CredentialsMissing, IssuanceFailed
from ..utils import presence
from .client import TokenClient


class TokenGenerator:
    """Exchanges the configured client credentials for a fresh token."""

    def __init__(self, client: TokenClient, config: CredentialConfig) -> None:
        self.client = client
        self.config = config

    async def generate(self) -> str:
        """Issue a new access token.

        Returns:
            The newly issued access token. Its expiry is logged, not stored.

        Raises:
            CredentialsMissing: If client id or secret is not configured.
            IssuanceFailed: If the issuance endpoint rejects the exchange or
                cannot be reached within the timeout.
        """
        if not self.config.has_client_credentials:
            message = "Client credentials not configured. Set CLIENT_ID and CLIENT_SECRET."
            logging.error(f"❌ {message}")
            logging.error(f"   CLIENT_ID: {presence(self.config.client_id)}")
            logging.error(f"   CLIENT_SECRET: {presence(self.config.client_secret)}")
            raise CredentialsMissing(message)
        try:
            issued = await self.client.issue_token(
                self.config.client_id,  # type: ignore[arg-type]
                self.config.client_secret,  # type: ignore[arg-type]
            )
        except IssuanceFailed as e:
            logging.error("❌ Token generation failed:")
            if e.status is not None:
                logging.error(f"   Status: {e.status}")
                logging.error(f"   Data: {e.payload}")
            else:
                logging.error(f"   Error: {str(e)}")
            raise
        return issued.access_token
