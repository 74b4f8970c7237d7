"""Logging setup for the service process."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``ballot_box`` logger tree."""
    logger = logging.getLogger("ballot_box")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_ballot_box", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ballot_box = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
