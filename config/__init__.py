"""
Config package for environment-driven server settings.
"""

from .settings import ConfigError, Settings, load_settings

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
]
