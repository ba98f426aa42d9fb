"""Configuration management: settings.conf, paths and validation settings.

This package provides:
- GlobalConfigManager: INI configuration management
- Paths: Path constants and utilities
- ValidationSettings / SettingsContext: options passed to the engine
"""

from connector_linter.config.global_config import GlobalConfigManager
from connector_linter.config.paths import Paths
from connector_linter.config.settings import (
    SettingsContext,
    ValidationSettings,
)
from connector_linter.types import GlobalConfig

__all__ = [
    "GlobalConfig",
    "GlobalConfigManager",
    "Paths",
    "SettingsContext",
    "ValidationSettings",
]
