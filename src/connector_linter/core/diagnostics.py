"""Diagnostic model handed to the editor host.

Positions follow the Language Server Protocol: zero-based lines and
characters counted in UTF-16 code units, so a range computed here lines up
with what the editor shows.
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from jsonschema.exceptions import ValidationError

from connector_linter.constants import DIAGNOSTIC_SOURCE

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class DiagnosticSeverity(IntEnum):
    """LSP diagnostic severities."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def whole_document(cls, text: str) -> "Range":
        """Range from the first to the last character of ``text``."""
        return cls(Position(0, 0), position_at(text, len(text)))


@dataclass(frozen=True)
class Diagnostic:
    """One validation failure reported against a document."""

    uri: str
    range: Range
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    source: str = DIAGNOSTIC_SOURCE

    def to_dict(self) -> dict[str, Any]:
        """Serialize in LSP shape (without the uri, which keys the set)."""
        return {
            "range": {
                "start": {
                    "line": self.range.start.line,
                    "character": self.range.start.character,
                },
                "end": {
                    "line": self.range.end.line,
                    "character": self.range.end.character,
                },
            },
            "message": self.message,
            "severity": int(self.severity),
            "source": self.source,
        }


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def position_at(text: str, offset: int) -> Position:
    """Convert a character offset into a line/character position."""
    offset = max(0, min(offset, len(text)))
    lines = _LINE_BREAK.split(text[:offset])
    return Position(len(lines) - 1, _utf16_length(lines[-1]))


def instance_path(error: ValidationError) -> str:
    """JSON Pointer to the failing value, empty for the document root."""
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1")
        for part in error.absolute_path
    )


def diagnostic_from_error(
    uri: str, text: str, error: ValidationError
) -> Diagnostic:
    """Map one structured validation error to a whole-document warning."""
    return Diagnostic(
        uri=uri,
        range=Range.whole_document(text),
        message=f"{instance_path(error)} {error.message}",
    )
