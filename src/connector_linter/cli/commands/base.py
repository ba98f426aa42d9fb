"""Base command handler for connector-linter CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace
from pathlib import Path

from connector_linter.config import GlobalConfig, GlobalConfigManager
from connector_linter.core.cache import ChecksumCacheStore
from connector_linter.logger import get_logger

logger = get_logger(__name__)


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner is the composition root: it loads the configuration once and
    hands it to every handler.
    """

    def __init__(
        self,
        config_manager: GlobalConfigManager,
        global_config: GlobalConfig | None = None,
    ) -> None:
        """Initialize the command handler with shared dependencies.

        Args:
            config_manager: Global configuration manager
            global_config: Already loaded configuration (loaded when omitted)

        """
        self.config_manager = config_manager
        self.global_config = (
            global_config or config_manager.load_global_config()
        )

    def cache_dir(self, args: Namespace) -> Path:
        """Cache directory from ``--cache-dir`` or settings.conf."""
        return args.cache_dir or self.global_config["directory"]["cache"]

    def cache_store(self, args: Namespace) -> ChecksumCacheStore:
        return ChecksumCacheStore(self.cache_dir(args))

    @abstractmethod
    async def execute(self, args: Namespace) -> int:
        """Run the command.

        Returns:
            Process exit code

        """
