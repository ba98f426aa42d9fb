"""settings.conf: the user's INI configuration file.

Layout::

    [DEFAULT]
    log_level = INFO
    console_log_level = WARNING

    [validation]
    extended_validation = true

    [directory]
    cache = ~/.config/connector-linter/cache
    logs = ~/.config/connector-linter/logs

Values missing from the file fall back to the defaults; invalid values
are logged and replaced by their default.
"""

import configparser
from pathlib import Path

from connector_linter.config.paths import Paths
from connector_linter.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_EXTENDED_VALIDATION,
    DEFAULT_LOG_LEVEL,
    DIRECTORY_KEYS,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_EXTENDED_VALIDATION,
    KEY_LOG_LEVEL,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_VALIDATION,
)
from connector_linter.logger import get_logger
from connector_linter.types import GlobalConfig

logger = get_logger(__name__)

RawConfigDict = dict[str, dict[str, str]]

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _new_parser(values: RawConfigDict) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        inline_comment_prefixes=("#", ";"),
        interpolation=None,
    )
    parser.read_dict(values)
    return parser


class GlobalConfigManager:
    """Reads and writes settings.conf."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            config_dir: Directory holding settings.conf
                (defaults to Paths.CONFIG_DIR)

        """
        self.config_dir = config_dir or Paths.CONFIG_DIR
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_global_config(self) -> RawConfigDict:
        """Default settings.conf content, section by section."""
        return {
            SECTION_DEFAULT: {
                KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
                KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            },
            SECTION_VALIDATION: {
                KEY_EXTENDED_VALIDATION: str(
                    DEFAULT_EXTENDED_VALIDATION
                ).lower(),
            },
            SECTION_DIRECTORY: {
                key: str(self.config_dir / key) for key in DIRECTORY_KEYS
            },
        }

    def load_global_config(self) -> GlobalConfig:
        """Load settings.conf layered over the defaults.

        A missing file yields the defaults; a malformed one is logged and
        ignored.
        """
        parser = _new_parser(self.get_default_global_config())

        if self.settings_file.exists():
            try:
                parser.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                logger.warning(
                    "Ignoring malformed %s: %s", self.settings_file, e
                )

        return self._to_global_config(parser)

    def _to_global_config(
        self, parser: configparser.ConfigParser
    ) -> GlobalConfig:
        defaults = parser[SECTION_DEFAULT]

        try:
            extended = parser.getboolean(
                SECTION_VALIDATION,
                KEY_EXTENDED_VALIDATION,
                fallback=DEFAULT_EXTENDED_VALIDATION,
            )
        except ValueError:
            logger.warning(
                "Invalid %s value, using default", KEY_EXTENDED_VALIDATION
            )
            extended = DEFAULT_EXTENDED_VALIDATION

        directories = parser[SECTION_DIRECTORY]
        return GlobalConfig(
            log_level=self._level(
                defaults.get(KEY_LOG_LEVEL), DEFAULT_LOG_LEVEL
            ),
            console_log_level=self._level(
                defaults.get(KEY_CONSOLE_LOG_LEVEL), DEFAULT_CONSOLE_LOG_LEVEL
            ),
            validation={"extended_validation": extended},
            directory={
                "cache": Paths.expand_path(directories["cache"]),
                "logs": Paths.expand_path(directories["logs"]),
            },
        )

    @staticmethod
    def _level(value: str | None, default: str) -> str:
        """Normalize a log level name, falling back to ``default``."""
        level = (value or "").strip().upper()
        if level in VALID_LOG_LEVELS:
            return level
        if value:
            logger.warning("Unknown log level %r, using %s", value, default)
        return default

    def save_global_config(self, config: GlobalConfig) -> None:
        """Write ``config`` to settings.conf, creating the directory."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        parser = _new_parser(
            {
                SECTION_DEFAULT: {
                    KEY_LOG_LEVEL: config["log_level"],
                    KEY_CONSOLE_LOG_LEVEL: config["console_log_level"],
                },
                SECTION_VALIDATION: {
                    KEY_EXTENDED_VALIDATION: str(
                        config["validation"]["extended_validation"]
                    ).lower(),
                },
                SECTION_DIRECTORY: {
                    key: str(path)
                    for key, path in config["directory"].items()
                },
            }
        )

        with self.settings_file.open("w", encoding="utf-8") as f:
            parser.write(f)
        logger.debug("Saved global config to %s", self.settings_file)
