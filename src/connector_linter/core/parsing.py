"""Relaxed JSON (JSON5) parsing for documents and schemas.

Connector files are often edited by hand and may carry comments or
trailing commas, so everything is read through ``json5``.
"""

from collections.abc import Iterator
from pathlib import PurePath
from typing import Any

import json5

from connector_linter.exceptions import DocumentParseError

_BOM = "\ufeff"


def loads(text: str, target: str | None = None) -> Any:
    """Parse JSON5 text.

    Args:
        text: Document or schema text
        target: Name used in the error message

    Returns:
        Parsed value

    Raises:
        DocumentParseError: If the text is not valid JSON5

    """
    try:
        return json5.loads(text.removeprefix(_BOM))
    except (ValueError, RecursionError) as e:
        raise DocumentParseError(str(e), target) from e


def iter_strings(value: Any) -> Iterator[str]:
    """Yield every string found in a parsed JSON value, keys excluded."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_strings(item)
    elif isinstance(value, list):
        for item in value:
            yield from iter_strings(item)


def referenced_file_names(value: Any) -> frozenset[str]:
    """Collect lower-cased JSON file names referenced by string values.

    ``settings.json`` points at its sibling files by name, e.g.
    ``"apiDefinition": "apiDefinition.swagger.json"``. Those names form
    the document's dependency set.
    """
    names = set()
    for text in iter_strings(value):
        candidate = text.strip().replace("\\", "/")
        if candidate.lower().endswith(".json"):
            names.add(PurePath(candidate).name.lower())
    return frozenset(names)
