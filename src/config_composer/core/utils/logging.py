from __future__ import annotations

import logging
import sys
from pathlib import Path

from config_composer.core.utils.io import ensure_parent_dir

PACKAGE_LOGGER = "config_composer"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Path | None = None) -> logging.Logger:
    """Install the composer's log handler on the package logger.

    Logs go to stderr by default, or to ``log_path`` when given. Calling this
    again replaces the handler installed by the previous call; handlers added
    by anyone else are left alone.
    """
    global _INSTALLED_HANDLER

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_parent_dir(resolved)
        handler = logging.FileHandler(resolved, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _INSTALLED_HANDLER = handler
    return logger


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging` (used by tests)."""
    global _INSTALLED_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None
    logger.setLevel(logging.NOTSET)


__all__ = ["configure_logging", "reset_logging", "PACKAGE_LOGGER", "LOG_FORMAT"]
