"""Central application context for shared async resources."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import aiohttp

from .auth_token.client import TokenClient
from .auth_token.manager import CredentialManager
from .config import CredentialConfig, load_credential_config
from .constants import API_BASE_URL


class ApplicationContext:
    """Composition root: owns the HTTP session, the config and the manager."""

    # Class / instance attribute type declarations (helps mypy)
    session: aiohttp.ClientSession | None
    config: CredentialConfig | None
    credential_manager: CredentialManager | None
    _started: bool
    _lock: asyncio.Lock

    def __init__(self) -> None:
        self.session = None
        self.config = None
        self.credential_manager = None
        self._started = False
        self._lock = asyncio.Lock()

    # ------------------------- Construction ------------------------- #
    @classmethod
    async def create(
        cls,
        config: CredentialConfig | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        base_url: str = API_BASE_URL,
    ) -> ApplicationContext:
        """Create a context with a fresh HTTP session and credential manager.

        Args:
            config: Credential configuration; loaded from ``environ`` when omitted.
            environ: Environment mapping used when ``config`` is omitted.
            base_url: Upstream API root.

        Returns:
            A constructed, not yet started, ApplicationContext.
        """
        ctx = cls()
        logging.debug("🧪 Creating application context")
        ctx.config = config or load_credential_config(environ)
        ctx.session = aiohttp.ClientSession()
        logging.debug("🔗 HTTP session created")
        client = TokenClient(ctx.session, base_url)
        ctx.credential_manager = CredentialManager(ctx.config, client=client)
        return ctx

    @property
    def manager(self) -> CredentialManager:
        """The credential manager; raises RuntimeError after shutdown."""
        if self.credential_manager is None:
            raise RuntimeError("Credential manager is not available (context shut down)")
        return self.credential_manager

    # --------------------------- Lifecycle -------------------------- #
    async def start(self) -> None:
        """Start the credential manager. Idempotent."""
        async with self._lock:
            if self._started:
                return
            if self.credential_manager:
                await self.credential_manager.start()
            self._started = True
            logging.debug("🚀 Application context started")

    async def shutdown(self) -> None:
        """Stop the credential manager and close the HTTP session."""
        async with self._lock:
            logging.info("🔻 Application context shutdown initiated")
            await self._stop_credential_manager()
            await self._close_http_session()
            self._started = False
            logging.info("✅ Application context shutdown complete")

    async def _stop_credential_manager(self) -> None:
        if not self.credential_manager:
            return
        try:
            await self.credential_manager.stop()
        except (RuntimeError, OSError, ValueError) as e:
            logging.error(f"💥 Error stopping credential manager: {str(e)}")
        finally:
            self.credential_manager = None

    async def _close_http_session(self) -> None:
        if not self.session:
            return
        try:
            await self.session.close()
        except (aiohttp.ClientError, OSError, ValueError) as e:
            logging.error(f"💥 Error closing HTTP session: {str(e)}")
        finally:
            self.session = None
