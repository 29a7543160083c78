"""
Configuration constants for the credential lifecycle manager

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Remote service
API_BASE_URL = _get_env_str(
    "API_BASE_URL", "https://api.getport.io"
).rstrip("/")  # Base URL of the upstream workflow API
TOKEN_VALIDATION_PATH = "/v1/blueprints"  # Cheap authenticated read used as probe
TOKEN_ISSUANCE_PATH = "/v1/auth/access_token"  # Client credentials exchange

# Timeouts (every outbound call is bounded)
TOKEN_VALIDATION_TIMEOUT_SECONDS = _get_env_float(
    "TOKEN_VALIDATION_TIMEOUT_SECONDS", 10
)
TOKEN_ISSUANCE_TIMEOUT_SECONDS = _get_env_float(
    "TOKEN_ISSUANCE_TIMEOUT_SECONDS", 10
)

# Rotation scheduling
TOKEN_ROTATION_INTERVAL_SECONDS = _get_env_int(
    "TOKEN_ROTATION_INTERVAL_SECONDS", 9000
)  # 2.5 hours between scheduled rotations
TOKEN_ROTATION_DRIFT_TOLERANCE_SECONDS = _get_env_int(
    "TOKEN_ROTATION_DRIFT_TOLERANCE_SECONDS", 60
)  # Late wake-ups beyond this are reported as drift

# Logging
CLIENT_ID_LOG_PREFIX_LENGTH = 8  # Characters of the client id that may appear in logs

# Operational HTTP surface
ADMIN_HOST = _get_env_str("ADMIN_HOST", "0.0.0.0")  # noqa: S104
ADMIN_PORT = _get_env_int("ADMIN_PORT", 3000)
