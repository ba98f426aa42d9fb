"""Load and apply logger settings.

Bootstrap defaults are returned without touching the config package so
that importing any module (which creates its logger) never triggers a
circular import. ``update_logger_from_config`` applies settings.conf levels
once configuration is available.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from connector_linter.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
)

if TYPE_CHECKING:
    from connector_linter.logger.state import _LoggerState

LOG_FILE_NAME = "connector-linter.log"


def load_log_settings() -> tuple[str, str, Path]:
    """Return bootstrap console level, file level and log file path.

    Environment Variable Override:
        CONNECTOR_LINTER_LOG_DIR: directory for the log file. The test
        suite points this at a temporary directory so test runs never
        write to the user's config directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv("CONNECTOR_LINTER_LOG_DIR")
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(state: "_LoggerState") -> None:
    """Update handler levels from settings.conf.

    Only handler levels change; handlers are never added or removed.
    Errors while loading the configuration leave the bootstrap levels in
    place so logging setup can never break startup.

    Args:
        state: Logger state object (from logger.state module)

    """
    try:
        # Late import: config modules create loggers at import time
        from connector_linter.config import GlobalConfigManager  # noqa: PLC0415

        config = GlobalConfigManager().load_global_config()
    except (ImportError, KeyError, OSError, ValueError):
        return

    console_level = getattr(
        logging, config["console_log_level"], logging.WARNING
    )
    file_level = getattr(logging, config["log_level"], logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.config_applied = True
