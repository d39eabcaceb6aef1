"""Console logging setup shared by the CLI and the web server."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("devjournal")

_console_handler: logging.Handler | None = None


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the ``devjournal`` logger.

    Calling it again only changes the level.
    """
    global _console_handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        _console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(_console_handler)
    return logger
