"""Central logging setup for datart.

Usage:
    from datart.utils.logger import setup_logging
    setup_logging("INFO")

Modules log through ``logging.getLogger(__name__)`` so every record lands
under the ``datart`` hierarchy configured here.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "datart"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a console handler to the ``datart`` logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_datart_console", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._datart_console = True
        logger.addHandler(handler)

    return logger
