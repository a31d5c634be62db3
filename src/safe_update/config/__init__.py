"""Configuration management for Safe Update."""

from safe_update.config.loader import ConfigurationError, get_config, load_config
from safe_update.config.settings import SafeUpdateSettings

__all__ = [
    "ConfigurationError",
    "SafeUpdateSettings",
    "get_config",
    "load_config",
]
