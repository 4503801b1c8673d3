"""
Logging setup for the console driver.
Library modules only call logging.getLogger(__name__); this wires the handler.
"""

import logging
from typing import Optional

from .config import EngineConfig

DEFAULT_LEVEL = "WARNING"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send log records to stderr using EngineConfig.LOG_FORMAT.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to EngineConfig.LOG_LEVEL,
            which comes from TTT_LOG_LEVEL. An unknown name falls back to
            WARNING and is reported once the handler is in place.
    """
    requested = (level or EngineConfig.LOG_LEVEL).upper()
    known = isinstance(logging.getLevelName(requested), int)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(requested if known else DEFAULT_LEVEL)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(EngineConfig.LOG_FORMAT))
    root.addHandler(stream_handler)

    if not known:
        logging.getLogger(__name__).warning(
            "Unknown log level %r, using %s", requested, DEFAULT_LEVEL
        )
