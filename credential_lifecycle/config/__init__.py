"""Configuration package exports."""

from .loader import ConfigLoader, load_credential_config, log_config_summary
from .model import CredentialConfig

__all__ = [
    "ConfigLoader",
    "CredentialConfig",
    "load_credential_config",
    "log_config_summary",
]
