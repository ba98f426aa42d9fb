"""Tests for relaxed JSON parsing and reference extraction."""

import pytest

from connector_linter.core import parsing
from connector_linter.exceptions import DocumentParseError


class TestLoads:
    def test_strict_json(self):
        assert parsing.loads('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_comments_and_trailing_commas(self):
        text = "{\n  // note\n  a: 1, /* block */\n  b: [1, 2,],\n}"

        assert parsing.loads(text) == {"a": 1, "b": [1, 2]}

    def test_byte_order_mark_ignored(self):
        assert parsing.loads('\ufeff{"a": 1}') == {"a": 1}

    def test_invalid_text_raises(self):
        with pytest.raises(DocumentParseError) as exc_info:
            parsing.loads('{"a": ', "apiProperties.json")

        assert exc_info.value.target == "apiProperties.json"


def test_iter_strings_skips_keys():
    value = {"k": ["a", {"inner": "b"}, 3, None], "n": 1}

    assert list(parsing.iter_strings(value)) == ["a", "b"]


class TestReferencedFileNames:
    def test_collects_json_file_names(self):
        settings = {
            "apiDefinition": "apiDefinition.swagger.json",
            "apiProperties": "./sub/ApiProperties.JSON",
            "icon": "icon.png",
            "script": "script.csx",
        }

        assert parsing.referenced_file_names(settings) == frozenset(
            {"apidefinition.swagger.json", "apiproperties.json"}
        )

    def test_windows_separators(self):
        assert parsing.referenced_file_names(["dir\\settings.json"]) == (
            frozenset({"settings.json"})
        )

    def test_no_references(self):
        assert parsing.referenced_file_names({"a": 1}) == frozenset()
