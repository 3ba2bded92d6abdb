"""Centralized logging configuration for the ``savingsflow`` package.

Entry points (the CLI, the web app factory) call ``configure_logging`` once at
startup. Library modules only call ``get_logger(__name__)`` and never attach
handlers of their own.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

LOG_LEVEL_ENV_VAR = "SAVINGSFLOW_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_PKG_LOGGER_NAME = "savingsflow"
_configured = False


def _parse_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return default
    env_val = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_val:
        return _parse_level(env_val, default)
    return default


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    fmt: Optional[str] = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single ``StreamHandler`` to the package root logger.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. When ``None`` the
        ``SAVINGSFLOW_LOG_LEVEL`` environment variable is used, falling back
        to ``WARNING``.
    fmt:
        Optional format string, defaults to ``DEFAULT_FORMAT``.
    stream:
        Output stream for the handler.
    """

    global _configured
    if _configured:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
