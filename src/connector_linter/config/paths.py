"""Path constants and utilities for connector-linter configuration."""

from pathlib import Path

from connector_linter.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
)


class Paths:
    """Application paths and directory structure."""

    # Base directories
    HOME_DIR = Path.home()
    CONFIG_DIR = HOME_DIR / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    # Bundled schema files (shipped with the package)
    PACKAGE_DIR = Path(__file__).parent.parent
    BUNDLED_SCHEMA_DIR = PACKAGE_DIR / "schemas"

    # User directories
    CACHE_DIR = CONFIG_DIR / "cache"
    LOGS_DIR = CONFIG_DIR / "logs"

    # Configuration files
    GLOBAL_CONFIG_FILE = CONFIG_DIR / CONFIG_FILE_NAME

    @classmethod
    def get_bundled_schema_path(cls, schema_file: str) -> Path:
        """Get path to a schema file bundled with the package.

        Args:
            schema_file: Schema file name (e.g. "paconn-settings.schema.json")

        Returns:
            Path inside the package's schemas directory
        """
        return cls.BUNDLED_SCHEMA_DIR / Path(schema_file).name

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand ``~`` and resolve relative paths against the home dir.

        Args:
            path_str: Path string from a config file or the command line

        Returns:
            Absolute path
        """
        path = Path(path_str).expanduser()
        if not path.is_absolute():
            path = cls.HOME_DIR / path
        return path
