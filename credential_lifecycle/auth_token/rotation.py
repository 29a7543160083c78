"""Rotation decision tree.

Order: re-validate what is held, then issue a new token from client
credentials, then fall back to the static tokens.

The function never mutates state. It returns a RotationResult and the
caller decides what to adopt.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..config.model import CredentialConfig
from ..errors.internal import CredentialsMissing, IssuanceFailed
from .types import RotationResult

Validate = Callable[[str], Awaitable[bool]]
Generate = Callable[[], Awaitable[str]]


async def _try_generate(generate: Generate, context: str) -> str | None:
    try:
        return await generate()
    except (CredentialsMissing, IssuanceFailed) as e:
        logging.warning(
            f"⚠️ Failed to generate token from client credentials ({context}): {str(e)}"
        )
        return None


async def _probe_static_tokens(
    config: CredentialConfig, validate: Validate
) -> RotationResult:
    for source, token in (
        ("primary", config.primary_token),
        ("secondary", config.secondary_token),
    ):
        if token and await validate(token):
            logging.info(f"✅ Using {source} token")
            return RotationResult.fell_back(token, source)
    logging.warning("⚠️ No valid tokens available")
    return RotationResult.none_valid()


def _static_source(config: CredentialConfig, token: str) -> str:
    if token == config.primary_token:
        return "primary"
    if token == config.secondary_token:
        return "secondary"
    return "static"


async def decide_rotation(
    current_token: str | None,
    config: CredentialConfig,
    validate: Validate,
    generate: Generate,
) -> RotationResult:
    """Run one pass of the rotation decision tree.

    Args:
        current_token: Token currently held, or None.
        config: Static credential configuration.
        validate: Coroutine function returning whether a token is accepted.
        generate: Coroutine function issuing a fresh token; may raise
            CredentialsMissing or IssuanceFailed.

    Returns:
        NOOP when the held token is still valid, GENERATED / FELL_BACK with
        the token to adopt, or NONE_VALID when nothing worked.
    """
    can_generate = config.has_client_credentials

    if current_token is None and can_generate:
        logging.info("🔄 No current token, generating from client credentials...")
        token = await _try_generate(generate, "no current token")
        if token:
            logging.info("✅ Token generated successfully from client credentials")
            return RotationResult.generated(token)

    if current_token is None:
        return await _probe_static_tokens(config, validate)

    if await validate(current_token):
        return RotationResult.noop()

    logging.info("🔄 Current token invalid, attempting rotation...")
    if can_generate:
        token = await _try_generate(generate, "current token invalid")
        if token:
            logging.info("✅ Token rotated successfully (programmatically generated)")
            return RotationResult.generated(token)
        logging.warning("⚠️ Programmatic token generation failed, trying backup tokens")

    fallback = config.other_static_token(current_token)
    if fallback and await validate(fallback):
        source = _static_source(config, fallback)
        logging.info(f"✅ Token rotated successfully (backup {source} token)")
        return RotationResult.fell_back(fallback, source)

    logging.warning("⚠️ All tokens appear to be invalid")
    return RotationResult.none_valid()
