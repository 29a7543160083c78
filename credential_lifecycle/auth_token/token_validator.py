"""Token validation logic."""

from __future__ import annotations

import logging

from ..errors.internal import ValidationFailed
from .client import TokenClient


class TokenValidator:
    """Confirms whether a token is currently accepted by the remote service."""

    def __init__(self, client: TokenClient) -> None:
        self.client = client

    async def validate(self, token: str | None) -> bool:
        """Validate ``token`` remotely.

        Args:
            token: Bearer token to check.

        Returns:
            True only when the probe endpoint answered 200. Rejections,
            timeouts and transport errors all yield False.
        """
        if not token:
            return False
        try:
            await self.client.check_token(token)
        except ValidationFailed as e:
            if e.status is None:
                logging.warning(f"⏱️ Token validation failed without a response: {str(e)}")
            else:
                logging.info(f"❌ Token validation failed (status={e.status})")
            return False
        logging.debug("✅ Token validated")
        return True
