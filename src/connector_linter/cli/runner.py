"""CLI runner: route parsed arguments to command handlers."""

import sys
from argparse import Namespace
from collections.abc import Sequence

from connector_linter import __version__
from connector_linter.cli.commands import (
    BaseCommandHandler,
    LintHandler,
    RefreshCacheHandler,
)
from connector_linter.cli.parser import CLIParser
from connector_linter.config import GlobalConfigManager
from connector_linter.logger import get_logger, update_logger_from_config

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and composition root."""

    def __init__(self, config_manager: GlobalConfigManager | None = None) -> None:
        self.config_manager = config_manager or GlobalConfigManager()
        self.global_config = self.config_manager.load_global_config()
        update_logger_from_config()

        self.command_handlers: dict[str, BaseCommandHandler] = {
            "lint": LintHandler(self.config_manager, self.global_config),
            "refresh-cache": RefreshCacheHandler(
                self.config_manager, self.global_config
            ),
        }

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse arguments and run the selected command.

        Returns:
            Process exit code

        """
        args = CLIParser().parse_args(argv)

        if args.version:
            print(__version__)
            return 0

        if not args.command:
            print("No command specified. Use --help.", file=sys.stderr)
            return 2

        return await self._execute_command(args)

    async def _execute_command(self, args: Namespace) -> int:
        handler = self.command_handlers.get(args.command)
        if handler is None:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 2

        logger.debug("Running command %s", args.command)
        return await handler.execute(args)
