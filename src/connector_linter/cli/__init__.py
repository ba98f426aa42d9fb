"""Command-line interface for connector-linter."""

from connector_linter.cli.runner import CLIRunner

__all__ = ["CLIRunner"]
