"""Logging setup for Commet.

Library modules only create loggers; the CLI decides where records go.
"""

import logging
import os
from typing import Optional

from commet.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"


def get_log_level() -> str:
    """Log level from the environment, upper-cased."""
    return os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: Optional[str] = None) -> None:
    """Send log records to stderr.

    Args:
        level: Level name such as ``"DEBUG"``. Falls back to
            ``COMMET_LOG_LEVEL`` and then to ``WARNING``.
    """
    if level is None:
        level = get_log_level()

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(format=LOG_FORMAT, level=numeric_level)
