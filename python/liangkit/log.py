"""Logging setup.

Modules only create ``logging.getLogger(__name__)`` loggers under the
``liangkit`` namespace. Applications that want that output on stderr
call ``configure_logging`` once.
"""

import logging
from typing import Optional

from .config import get_default

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# stderr handler owned by configure_logging
_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str | int] = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Args:
        level: Level name or number; defaults to LIANGKIT_LOG_LEVEL or INFO.
            Unknown names fall back to INFO.

    Returns:
        The ``liangkit`` logger.
    """
    global _handler
    if level is None:
        level = get_default("log_level")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("liangkit")
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger
