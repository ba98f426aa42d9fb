"""Tests for validation settings and SettingsContext."""

from pathlib import Path

import pytest

from connector_linter.config import SettingsContext, ValidationSettings


class TestValidationSettings:
    def test_defaults_to_extended(self):
        assert ValidationSettings().extended_validation is True

    @pytest.mark.parametrize(
        ("options", "expected"),
        [
            ({"extendedValidation": False}, False),
            ({"extendedValidation": True}, True),
            ({"extended_validation": "no"}, False),
            ({"extended_validation": " Yes "}, True),
            ({"extendedValidation": "off"}, False),
            ({}, True),
        ],
    )
    def test_from_mapping(self, options, expected):
        assert (
            ValidationSettings.from_mapping(options).extended_validation
            is expected
        )

    def test_camel_case_key_wins(self):
        options = {"extendedValidation": False, "extended_validation": True}

        assert ValidationSettings.from_mapping(options).extended_validation is False

    def test_invalid_value_falls_back_with_warning(self, caplog):
        settings = ValidationSettings.from_mapping({"extendedValidation": 3})

        assert settings.extended_validation is True
        assert "Ignoring invalid extendedValidation value" in caplog.text


class TestSettingsContext:
    def test_reload_replaces_snapshot(self):
        context = SettingsContext()
        before = context.settings

        after = context.reload({"extendedValidation": False})

        assert context.settings is after
        assert before.extended_validation is True
        assert after.extended_validation is False

    def test_from_global_config(self):
        config = {
            "log_level": "INFO",
            "console_log_level": "WARNING",
            "validation": {"extended_validation": False},
            "directory": {"cache": Path("/tmp/c"), "logs": Path("/tmp/l")},
        }

        context = SettingsContext.from_global_config(config)

        assert context.settings.extended_validation is False
