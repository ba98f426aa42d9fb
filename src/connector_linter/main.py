"""Main CLI entry point for connector-linter."""

import sys

import uvloop

from connector_linter.cli import CLIRunner
from connector_linter.logger import get_logger

logger = get_logger(__name__)


async def async_main() -> int:
    """Run the CLI and return its exit code."""
    runner = CLIRunner()
    try:
        return await runner.run()
    except Exception:
        logger.exception("CLI encountered an error")
        raise


def main() -> None:
    """Run the CLI application on the uvloop event loop."""
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(130)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
