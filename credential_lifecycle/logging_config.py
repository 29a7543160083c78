"""
Logging setup for the credential lifecycle service.

Console output goes through colorlog. Failures are written as single
structured lines tagged with their category (config, issuance, validation,
network, internal) so they can be grepped per category.
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any, TextIO

import colorlog

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}
MESSAGE_COLORS = {"message": {"ERROR": "red", "CRITICAL": "magenta"}}

# Loggers capped at WARNING; the health endpoint is polled constantly
QUIET_LOGGERS = ("aiohttp.access",)

DEBUG_VALUES = ("true", "1", "yes")


def format_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> str:
    """Render ``[CATEGORY] message | Exception: ... | Context: k=v | ...``."""
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    return " | ".join(parts)


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log one failure as a structured line.

    Args:
        error_type: Category of the error (e.g., 'issuance', 'validation', 'config')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional key/value data; never put secrets here
        level: Logging level (default: ERROR)
    """
    logging.log(level, format_structured_error(error_type, message, exception, context))


def resolve_log_level(environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    if env.get("DEBUG", "").strip().lower() in DEBUG_VALUES:
        return logging.DEBUG
    return logging.INFO


class LoggerConfigurator:
    """Installs a colorlog handler on the root logger.

    ``DEBUG`` set to 'true', '1' or 'yes' selects DEBUG level, otherwise INFO.
    """

    def __init__(
        self, environ: Mapping[str, str] | None = None, stream: TextIO | None = None
    ):
        self.environ = environ
        self.stream = stream

    def configure(self) -> int:
        level = resolve_log_level(self.environ)

        handler = logging.StreamHandler(self.stream or sys.stderr)
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors=LEVEL_COLORS,
                secondary_log_colors=MESSAGE_COLORS,
                reset=True,
            )
        )
        logging.basicConfig(level=level, handlers=[handler], force=True)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        logging.debug(f"🪵 Logging configured level={logging.getLevelName(level)}")
        return level
