"""Configuration loading from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from ..utils import presence
from .model import CredentialConfig

# field -> (primary variable, legacy alias)
ENV_VARIABLES: dict[str, tuple[str, str]] = {
    "primary_token": ("PRIMARY_TOKEN", "PORT_API_TOKEN_PRIMARY"),
    "secondary_token": ("SECONDARY_TOKEN", "PORT_API_TOKEN_SECONDARY"),
    "service_token": ("SERVICE_TOKEN", "PORT_SERVICE_TOKEN"),
    "client_id": ("CLIENT_ID", "PORT_CLIENT_ID"),
    "client_secret": ("CLIENT_SECRET", "PORT_CLIENT_SECRET"),
}


def _lookup(environ: Mapping[str, str], name: str, alias: str) -> str | None:
    value = environ.get(name)
    if value is not None and value.strip():
        return value
    return environ.get(alias)


class ConfigLoader:
    """Builds a CredentialConfig from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize ConfigLoader.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.
        """
        self.environ = os.environ if environ is None else environ

    def load(self) -> CredentialConfig:
        """Read every credential variable once and return the frozen config.

        The canonical variable name wins; the legacy ``PORT_*`` alias is only
        consulted when the canonical one is unset or blank.
        """
        values = {
            field: _lookup(self.environ, name, alias)
            for field, (name, alias) in ENV_VARIABLES.items()
        }
        return CredentialConfig(**values)


def load_credential_config(environ: Mapping[str, str] | None = None) -> CredentialConfig:
    return ConfigLoader(environ).load()


def log_config_summary(config: CredentialConfig) -> None:
    """Log which credentials are configured, never their values."""
    logging.info("🔑 Credential manager configuration:")
    logging.info(f"   Primary Token: {presence(config.primary_token)}")
    logging.info(f"   Secondary Token: {presence(config.secondary_token)}")
    logging.info(f"   Service Token: {presence(config.service_token)}")
    logging.info(f"   Client ID: {presence(config.client_id)}")
    logging.info(f"   Client Secret: {presence(config.client_secret)}")
    if not config.primary_token and not config.has_client_credentials:
        logging.warning("⚠️ No primary token or client credentials configured")
        logging.warning('   Set a token: export PRIMARY_TOKEN="your_token_here"')
        logging.warning(
            '   Or set credentials: export CLIENT_ID="your_id" CLIENT_SECRET="your_secret"'
        )
