"""Shared utilities for configuration and logging"""

from editlog.utils.config_loader import ConfigLoader, ConfigurationError
from editlog.utils.logging_config import configure_logging

__all__ = ["ConfigLoader", "ConfigurationError", "configure_logging"]
