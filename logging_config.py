from __future__ import annotations

import logging
import os
from typing import Optional

import config

_LOGGING_INITIALIZED = False


def init_logging(level: Optional[str] = None) -> None:
    """
    Initialize root logging once:
    - one console handler
    - level from the argument, else INKBOARD_LOG_LEVEL, else config.LOG_LEVEL
    """
    global _LOGGING_INITIALIZED
    if _LOGGING_INITIALIZED:
        return

    level_name = (level or os.environ.get(config.LOG_LEVEL_ENV) or config.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # Pillow logs every font and plugin lookup at debug level.
    logging.getLogger("PIL").setLevel(logging.WARNING)

    _LOGGING_INITIALIZED = True
    logging.getLogger(__name__).debug("Logging initialized at %s", level_name)
