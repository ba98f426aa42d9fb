"""Public logger API: setup_logging, get_logger and test helpers."""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from connector_linter.logger.config import load_log_settings
from connector_linter.logger.handlers import (
    ROOT_LOGGER_NAME,
    setup_root_logger,
)
from connector_linter.logger.state import _LoggerState, get_state

_FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Write out every record still waiting in the log queue.

    Blocks for at most a few seconds; afterwards the log file can be read
    directly.
    """
    state = get_state()
    listener, log_queue = state.queue_listener, state.log_queue
    if listener is None or log_queue is None:
        return

    deadline = time.monotonic() + _FLUSH_TIMEOUT_SECONDS
    while not log_queue.empty() and time.monotonic() < deadline:
        time.sleep(0.01)
    # the listener thread may still hold the last dequeued record
    time.sleep(0.1)

    for handler in listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _stop_listener(state: _LoggerState) -> None:
    if state.queue_listener is None:
        return
    flush_all_handlers()
    state.queue_listener.stop()
    state.queue_listener = None


atexit.register(lambda: _stop_listener(get_state()))


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the logging system on first use and return a logger.

    The first call builds the QueueListener with a stderr console handler
    and a rotating file handler; later calls only look the logger up.
    Levels and the log path that are not given come from
    ``load_log_settings()``.

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            default_console, default_file, default_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or default_console,
                file_level or default_file,
                log_file or default_path,
                enable_file_logging,
            )
    return logging.getLogger(name)


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Return a logger below ``connector_linter``.

    Module code always calls ``get_logger(__name__)`` and logs with
    ``%``-style arguments.
    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def clear_logger_state() -> None:
    """Tear the logging system down so the next call rebuilds it.

    Only for tests.
    """
    state = get_state()
    with state.lock:
        _stop_listener(state)
        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False

        for logger_name, candidate in list(
            logging.Logger.manager.loggerDict.items()
        ):
            if not logger_name.startswith(ROOT_LOGGER_NAME):
                continue
            if not isinstance(candidate, logging.Logger):
                continue
            for handler in candidate.handlers[:]:
                handler.close()
                candidate.removeHandler(handler)
