"""Log-level gated package logger.

Every module logs through `logging.getLogger(__name__)` below the
`pg_client_helper` namespace; this module only decides what reaches output.
"""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "pg_client_helper"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "SILENT": logging.CRITICAL + 1,
}
DEFAULT_LOG_LEVEL = "SILENT"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def normalize_log_level(level: Optional[str]) -> str:
    """Return the canonical level name; unknown or empty values mean SILENT."""

    if not level:
        return DEFAULT_LOG_LEVEL
    name = level.strip().upper()
    if name == "WARNING":
        return "WARN"
    if name not in LOG_LEVELS:
        return DEFAULT_LOG_LEVEL
    return name


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply `level` to the package logger and make sure it has an output.

    Args:
        level: One of DEBUG, INFO, WARN, ERROR, SILENT.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    name = normalize_log_level(level)
    logger.setLevel(LOG_LEVELS[name])
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
