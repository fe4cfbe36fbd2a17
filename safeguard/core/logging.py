"""Logging setup for the service."""
from __future__ import annotations

import logging

LOGGER_NAME = "safeguard"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if not any(getattr(handler, "_safeguard", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._safeguard = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
