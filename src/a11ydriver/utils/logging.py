"""Logging setup for a11ydriver.

Every module logs through a child of the ``a11ydriver`` logger. This
module attaches the handlers to that logger. Calling
:func:`setup_logging` again replaces the handlers it installed earlier
rather than stacking duplicates.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from a11ydriver.config.settings import LoggingConfig

PACKAGE_LOGGER = "a11ydriver"

_installed: list[logging.Handler] = []


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        path = Path(config.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach a stderr handler, plus an optional file handler, to the package logger.

    Args:
        config: Logging configuration. If None, logs INFO and above to
                stderr. Unknown level names fall back to INFO.

    Returns:
        The configured ``a11ydriver`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed[:] = _build_handlers(config)
    for handler in _installed:
        logger.addHandler(handler)

    logger.setLevel(_resolve_level(config.level))
    logger.debug("Logging at %s to %s", config.level.upper(), config.file or "stderr")
    return logger
