"""Centralized type definitions for connector-linter.

TypedDicts shared by the configuration layer and its callers.
"""

from pathlib import Path
from typing import TypedDict


class DirectoryConfig(TypedDict):
    """Directory paths configuration."""

    cache: Path
    logs: Path


class ValidationConfig(TypedDict):
    """Validation options from the [validation] section."""

    extended_validation: bool


class GlobalConfig(TypedDict):
    """Global application configuration."""

    log_level: str
    console_log_level: str
    validation: ValidationConfig
    directory: DirectoryConfig
