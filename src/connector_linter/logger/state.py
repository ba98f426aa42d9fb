"""Process-wide state of the logging system.

Kept in one object so the QueueListener is started exactly once and tests
can tear it down again.
"""

import queue
import threading
from dataclasses import dataclass, field
from logging.handlers import QueueListener


@dataclass
class _LoggerState:
    lock: threading.Lock = field(default_factory=threading.Lock)
    root_initialized: bool = False
    # settings.conf levels applied to the running handlers
    config_applied: bool = False
    queue_listener: QueueListener | None = None
    log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Return the logging state shared by the whole process."""
    return _state
