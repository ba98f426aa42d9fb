"""CLI command handlers."""

from connector_linter.cli.commands.base import BaseCommandHandler
from connector_linter.cli.commands.cache import RefreshCacheHandler
from connector_linter.cli.commands.lint import LintHandler

__all__ = ["BaseCommandHandler", "LintHandler", "RefreshCacheHandler"]
