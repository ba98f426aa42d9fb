"""Handler wiring for the logging system.

Console and rotating file handlers hang off a QueueListener thread. The
root ``connector_linter`` logger only carries a QueueHandler, so code in
the asyncio loop never blocks on log I/O.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from connector_linter.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from connector_linter.logger.formatters import HybridConsoleFormatter

ROOT_LOGGER_NAME = "connector_linter"


class ConfigurationError(Exception):
    """Raised when the logging system cannot be set up."""


def _level(name: str, fallback: int) -> int:
    return getattr(logging, name.upper(), fallback)


def _console_handler(level_name: str) -> logging.Handler:
    # stdout carries CLI output, logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        HybridConsoleFormatter(LOG_CONSOLE_FORMAT, LOG_CONSOLE_DATE_FORMAT)
    )
    handler.setLevel(_level(level_name, logging.WARNING))
    return handler


def _file_handler(log_file: Path, level_name: str) -> logging.Handler:
    """Rotating file handler writing to ``log_file``.

    Raises:
        ConfigurationError: If the log directory or file cannot be created

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Cannot open log file {log_file}: {e}"
        raise ConfigurationError(msg) from e

    handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    handler.setLevel(_level(level_name, logging.INFO))
    return handler


def setup_root_logger(
    state,
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Attach the queue handler to the root logger and start the listener.

    Runs once per process, under ``state.lock``. The root logger accepts
    every level; filtering happens in the listener's handlers.

    Raises:
        ConfigurationError: If the file handler cannot be created

    """
    handlers = [_console_handler(console_level)]
    if enable_file_logging:
        handlers.append(_file_handler(log_file, file_level))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for stale in root_logger.handlers[:]:
        stale.close()
        root_logger.removeHandler(stale)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False

    state.log_queue = queue.Queue()
    state.queue_listener = QueueListener(
        state.log_queue, *handlers, respect_handler_level=True
    )
    state.queue_listener.start()
    root_logger.addHandler(QueueHandler(state.log_queue))
    state.root_initialized = True
