"""Validation settings and the context object that carries them.

Settings are never read from module globals: callers hold a
``SettingsContext`` and pass it into ``resolve``/``validate``. The host
replaces the settings only through ``SettingsContext.reload``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from connector_linter.constants import (
    DEFAULT_EXTENDED_VALIDATION,
    HOST_KEY_EXTENDED_VALIDATION,
    KEY_EXTENDED_VALIDATION,
)
from connector_linter.logger import get_logger
from connector_linter.types import GlobalConfig

logger = get_logger(__name__)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class ValidationSettings:
    """Options that influence schema selection."""

    extended_validation: bool = DEFAULT_EXTENDED_VALIDATION

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ValidationSettings":
        """Build settings from a host configuration mapping.

        Accepts both the editor's camelCase key and the INI snake_case key.
        Missing or unrecognized values fall back to the default.
        """
        raw = options.get(
            HOST_KEY_EXTENDED_VALIDATION,
            options.get(KEY_EXTENDED_VALIDATION),
        )
        return cls(extended_validation=_coerce_bool(raw))


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if value is not None:
        logger.warning(
            "Ignoring invalid %s value: %r",
            HOST_KEY_EXTENDED_VALIDATION,
            value,
        )
    return DEFAULT_EXTENDED_VALIDATION


class SettingsContext:
    """Holds the current ValidationSettings for one engine instance."""

    def __init__(self, settings: ValidationSettings | None = None) -> None:
        self._settings = settings or ValidationSettings()

    @classmethod
    def from_global_config(cls, config: GlobalConfig) -> "SettingsContext":
        """Seed the context from settings.conf values."""
        return cls(
            ValidationSettings(
                extended_validation=config["validation"]["extended_validation"]
            )
        )

    @property
    def settings(self) -> ValidationSettings:
        """Current settings snapshot."""
        return self._settings

    def reload(self, options: Mapping[str, Any]) -> ValidationSettings:
        """Replace the settings from a configuration-change payload.

        Returns:
            The new settings

        """
        self._settings = ValidationSettings.from_mapping(options)
        logger.debug(
            "Validation settings reloaded: extended_validation=%s",
            self._settings.extended_validation,
        )
        return self._settings
