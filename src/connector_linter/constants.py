"""Centralized constants module for connector-linter.

This module serves as the single source of truth for shared constants
across the connector-linter codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from connector_linter.constants import DIAGNOSTIC_SOURCE
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

# Configuration file name inside the config directory
CONFIG_FILE_NAME: Final[str] = "settings.conf"

# Default config directory name under the user's home directory
CONFIG_DIR_NAME: Final[str] = ".config"

# Application-specific subdirectory under the config directory
DEFAULT_CONFIG_SUBDIR: Final[str] = "connector-linter"

# Configuration defaults
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_EXTENDED_VALIDATION: Final[bool] = True

# Config section and key names
SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_VALIDATION: Final[str] = "validation"
SECTION_DIRECTORY: Final[str] = "directory"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_EXTENDED_VALIDATION: Final[str] = "extended_validation"

# Host-side option name (camelCase, as editors send it)
HOST_KEY_EXTENDED_VALIDATION: Final[str] = "extendedValidation"

# Known directory keys expected in the directory section
DIRECTORY_KEYS: Final[tuple[str, ...]] = ("cache", "logs")

# =============================================================================
# Schema Constants
# =============================================================================

# Base URL of the upstream schema files
SCHEMA_BASE_URL: Final[str] = (
    "https://raw.githubusercontent.com/microsoft/"
    "PowerPlatformConnectors/dev/schemas"
)

# Marker in "$schema" that selects the legacy (draft-04) compiler
LEGACY_DRAFT_MARKER: Final[str] = "draft-04"

# Source label attached to every diagnostic
DIAGNOSTIC_SOURCE: Final[str] = "JSON Schema Validation"

# Encoding used for cached and bundled schema files
SCHEMA_ENCODING: Final[str] = "utf-8"

# =============================================================================
# Logging Constants
# =============================================================================

# Rotation threshold for the log file (bytes)
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB

# Number of rotated log files to keep
LOG_BACKUP_COUNT: Final[int] = 5

# Console and file format strings used by the logger
LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
