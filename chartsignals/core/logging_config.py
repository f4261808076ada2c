"""
Logging setup for applications embedding the engine.

The engine modules only create module-level loggers; nothing is configured
on import.
"""

import logging
from typing import Optional, Union

from chartsignals.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging. Defaults to Settings.log_level."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("chartsignals").setLevel(level)
