"""Credential lifecycle manager."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

import aiohttp

from ..config.loader import log_config_summary
from ..config.model import CredentialConfig
from ..errors.handling import log_error
from ..errors.internal import CredentialsMissing, IssuanceFailed
from .background_task_manager import BackgroundTaskManager
from .client import TokenClient
from .rotation import decide_rotation
from .token_generator import TokenGenerator
from .token_validator import TokenValidator
from .types import CredentialState, CredentialStatus, RotationOutcome, RotationResult


class CredentialManager:
    """Holds exactly one usable bearer token and keeps it alive.

    Collaborators only read through ``get_current_token()`` / ``get_status()``
    and trigger ``manual_rotate()``. Every mutation goes through ``rotate()``
    (or the one-off startup generation), both guarded by
    ``state.is_rotating``.

    The guard is a plain flag: it is checked and set with no ``await`` in
    between, which is race-free on a single event loop. Do not share an
    instance across threads.
    """

    def __init__(
        self,
        config: CredentialConfig,
        http_session: aiohttp.ClientSession | None = None,
        *,
        client: TokenClient | None = None,
        validator: TokenValidator | None = None,
        generator: TokenGenerator | None = None,
        rotation_interval: timedelta | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            config: Static credential configuration.
            http_session: Session used to build the default TokenClient.
            client: Explicit TokenClient; overrides ``http_session``.
            validator: Explicit validator (tests inject fakes here).
            generator: Explicit generator (tests inject fakes here).
            rotation_interval: Time between scheduled rotations.

        Raises:
            TypeError: If no HTTP session or client is given and the validator
                or generator would need one.
        """
        self.config = config
        if client is None and http_session is not None:
            client = TokenClient(http_session)
        if client is None and (validator is None or generator is None):
            raise TypeError("http_session or client is required")
        self.validator = validator or TokenValidator(client)  # type: ignore[arg-type]
        self.generator = generator or TokenGenerator(client, config)  # type: ignore[arg-type]
        self.state = CredentialState(current_token=config.primary_token)
        if rotation_interval is not None:
            self.state.rotation_interval = rotation_interval
        self.background_task_manager = BackgroundTaskManager(self)
        self.running = False

    # ----------------------------- Read path ----------------------------- #
    def get_current_token(self) -> str | None:
        return self.state.current_token

    @property
    def is_rotating(self) -> bool:
        return self.state.is_rotating

    def get_status(self) -> CredentialStatus:
        """Return a snapshot of presence flags and rotation timestamps."""
        flags = self.config.presence_flags()
        return CredentialStatus(
            current_token=self.state.current_token is not None,
            last_rotation=self.state.last_rotation.isoformat(),
            next_rotation=self.state.next_rotation.isoformat(),
            is_rotating=self.state.is_rotating,
            **flags,
        )

    # ----------------------------- Lifecycle ----------------------------- #
    async def start(self) -> None:
        """Log the configuration, kick off startup generation and the rotation loop.

        Startup generation only happens when there is no primary token but
        client credentials exist. It runs in the background and its failure
        is logged, never raised.
        """
        if self.running:
            return
        self.running = True
        log_config_summary(self.config)
        if not self.config.primary_token and self.config.has_client_credentials:
            logging.info(
                "🔄 No primary token found, generating initial token from client credentials..."
            )
            self.background_task_manager.spawn(
                self.initialize_from_credentials(), category="startup_generation"
            )
        await self.background_task_manager.start()
        logging.debug("▶️ Started credential manager")

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        await self.background_task_manager.stop()
        logging.debug("⏹️ Stopped credential manager")

    async def initialize_from_credentials(self) -> bool:
        """Generate the initial token from client credentials.

        Returns:
            True if a token was adopted, False if generation failed or another
            rotation held the guard.
        """
        if self.state.is_rotating:
            return False
        self.state.is_rotating = True
        try:
            token = await self.generator.generate()
            self.state.adopt(token)
            logging.info("✅ Initial token generated successfully from client credentials")
            return True
        except (CredentialsMissing, IssuanceFailed) as e:
            log_error(
                "Failed to generate initial token from client credentials",
                e,
                context={"hint": "check CLIENT_ID and CLIENT_SECRET"},
            )
            return False
        finally:
            self.state.is_rotating = False

    # ----------------------------- Rotation ------------------------------ #
    async def rotate(self, trigger: str = "manual") -> RotationResult:
        """Run one rotation attempt.

        Returns immediately with SKIPPED when another attempt is in flight.
        Never raises: unexpected faults are logged and reported as NONE_VALID.

        Args:
            trigger: Label for logs ("scheduled", "manual", ...).

        Returns:
            The RotationResult that was applied.
        """
        if self.state.is_rotating:
            logging.debug(f"⏭️ Rotation already in progress, skipping trigger={trigger}")
            return RotationResult.skipped()
        self.state.is_rotating = True
        try:
            result = await decide_rotation(
                self.state.current_token,
                self.config,
                self.validator.validate,
                self.generator.generate,
            )
            self._apply(result)
            logging.debug(f"🔁 Rotation finished trigger={trigger} outcome={result.outcome.value}")
            return result
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            log_error("Token rotation error", e, context={"trigger": trigger})
            return RotationResult.none_valid()
        finally:
            self.state.is_rotating = False

    def _apply(self, result: RotationResult) -> None:
        if not result.changes_state or result.token is None:
            return
        self.state.adopt(result.token)
        if result.outcome == RotationOutcome.FELL_BACK:
            logging.info(f"🔑 Adopted {result.source} token")

    def manual_rotate(self) -> asyncio.Task[RotationResult] | None:
        """Trigger an out-of-band rotation without waiting for it.

        Returns:
            The scheduled task, or None when a rotation is already running.
        """
        if self.state.is_rotating:
            logging.info("⏭️ Manual rotation ignored, rotation already in progress")
            return None
        logging.info("🔄 Manual token rotation requested")
        return self.background_task_manager.spawn(
            self.rotate(trigger="manual"), category="manual_rotation"
        )
