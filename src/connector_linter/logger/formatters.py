"""Console formatters.

INFO records are user-facing progress lines and print as the bare
message. Every other level prints the structured format with an ANSI
colored level name.
"""

import logging

from connector_linter.constants import LOG_COLORS


class SimpleConsoleFormatter(logging.Formatter):
    """Message text only."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class ColoredConsoleFormatter(logging.Formatter):
    """Structured formatter that colors the level name."""

    def format(self, record: logging.LogRecord) -> str:
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Other handlers share the record: format a copy
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{LOG_COLORS['RESET']}"
        return super().format(colored)


class HybridConsoleFormatter(logging.Formatter):
    """Plain message for INFO, colored structured output otherwise.

    Example:
        Cached schema: /home/u/.config/connector-linter/cache/x.schema.json
        12:30:45 - connector_linter.core.fetcher - WARNING - Fetch failed ...

    """

    def __init__(
        self, fmt: str | None = None, datefmt: str | None = None
    ) -> None:
        super().__init__(fmt, datefmt)
        self._plain = SimpleConsoleFormatter()
        self._structured = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        formatter = (
            self._plain if record.levelno == logging.INFO else self._structured
        )
        return formatter.format(record)
