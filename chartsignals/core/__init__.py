"""
Core configuration and logging.
"""

from chartsignals.core.config import Settings, get_settings, settings
from chartsignals.core.logging_config import configure_logging

__all__ = ["Settings", "get_settings", "settings", "configure_logging"]
