"""Tests for console formatters."""

import logging

from connector_linter.constants import LOG_COLORS
from connector_linter.logger import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)


def make_record(level: int, msg: str = "Validated %s") -> logging.LogRecord:
    return logging.LogRecord(
        "connector_linter.core", level, __file__, 1, msg, ("doc",), None
    )


def test_simple_formatter_shows_message_only():
    assert SimpleConsoleFormatter().format(make_record(logging.INFO)) == (
        "Validated doc"
    )


def test_colored_formatter_restores_levelname():
    record = make_record(logging.WARNING)

    output = ColoredConsoleFormatter("%(levelname)s %(message)s").format(record)

    assert output.startswith(LOG_COLORS["WARNING"])
    assert record.levelname == "WARNING"


def test_hybrid_formatter_switches_on_level():
    formatter = HybridConsoleFormatter("%(name)s - %(levelname)s - %(message)s")

    assert formatter.format(make_record(logging.INFO)) == "Validated doc"
    warning = formatter.format(make_record(logging.WARNING))
    assert warning.startswith("connector_linter.core - ")
    assert warning.endswith(" - Validated doc")
