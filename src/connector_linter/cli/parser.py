"""CLI argument parser for connector-linter."""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path


class CLIParser:
    """Command-line argument parser for connector-linter."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace

        """
        parser = self.create_parser()
        return parser.parse_args(argv)

    def create_parser(self) -> argparse.ArgumentParser:
        """Build the main parser with its subcommands."""
        parser = argparse.ArgumentParser(
            prog="connector-lint",
            description="Power Platform custom connector linter",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Lint the files of one connector
  %(prog)s lint apiDefinition.swagger.json apiProperties.json settings.json

  # Base schemas only, machine-readable output
  %(prog)s lint --no-extended --format json apiProperties.json

  # Download the latest upstream schemas into the cache
  %(prog)s refresh-cache
            """,
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show connector-linter version and exit",
        )
        self._add_cache_dir_argument(parser, default=None)

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_lint_command(subparsers)
        self._add_refresh_cache_command(subparsers)
        return parser

    def _add_lint_command(self, subparsers) -> None:
        lint_parser = subparsers.add_parser(
            "lint", help="Validate connector files against their schemas"
        )
        lint_parser.add_argument(
            "files", nargs="+", type=Path, help="Connector files to validate"
        )
        lint_parser.add_argument(
            "--no-extended",
            dest="extended",
            action="store_false",
            default=None,
            help="Validate against the base schemas only",
        )
        lint_parser.add_argument(
            "--extended",
            dest="extended",
            action="store_true",
            help="Apply the extended schemas (default from settings.conf)",
        )
        lint_parser.add_argument(
            "--format",
            choices=("text", "json"),
            default="text",
            help="Output format (default: text)",
        )
        lint_parser.add_argument(
            "--refresh",
            action="store_true",
            help="Refresh the schema cache before validating",
        )
        # SUPPRESS keeps a global --cache-dir when the subcommand omits it
        self._add_cache_dir_argument(lint_parser, default=argparse.SUPPRESS)
        lint_parser.set_defaults(extended=None)

    def _add_refresh_cache_command(self, subparsers) -> None:
        refresh_parser = subparsers.add_parser(
            "refresh-cache",
            help="Download upstream schemas, writing only changed files",
        )
        self._add_cache_dir_argument(
            refresh_parser, default=argparse.SUPPRESS
        )

    @staticmethod
    def _add_cache_dir_argument(parser, default) -> None:
        parser.add_argument(
            "--cache-dir",
            type=Path,
            default=default,
            help="Schema cache directory (default: from settings.conf)",
        )
