"""Logging utilities for connector-linter.

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener thread
                                               |
                                     Console + File handlers

Usage:
    >>> from connector_linter.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Validating %s", uri)  # %-style, never f-strings

Environment Variables:
    CONNECTOR_LINTER_LOG_DIR: Override the log directory (used by tests).

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers live only on the root 'connector_linter' logger
"""

from connector_linter.logger.config import (
    update_logger_from_config as _update_config,
)
from connector_linter.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from connector_linter.logger.handlers import ConfigurationError
from connector_linter.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from connector_linter.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config() -> None:
    """Apply settings.conf log levels to the running handlers."""
    _update_config(get_state())
