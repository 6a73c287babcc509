"""Logging setup for slabconf entry points.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed once by the CLI or a script via :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "slabconf"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_logging(level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Attach a stderr handler to the ``slabconf`` logger.

    Safe to call more than once: later calls only adjust the level.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_coerce_level(level))

    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
        _configured = True

    return logger
