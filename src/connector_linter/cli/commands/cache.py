"""refresh-cache command: update the local copies of upstream schemas."""

from argparse import Namespace

from connector_linter.cli.commands.base import BaseCommandHandler
from connector_linter.core.fetcher import refresh_schema_cache
from connector_linter.logger import get_logger

logger = get_logger(__name__)


class RefreshCacheHandler(BaseCommandHandler):
    """Download every base schema, writing only files that changed."""

    async def execute(self, args: Namespace) -> int:
        store = self.cache_store(args)
        logger.debug("Refreshing schema cache in %s", store.cache_dir)

        results = await refresh_schema_cache(store)
        for name, written in results.items():
            status = "updated" if written else "unchanged"
            print(f"{name}: {status}")
        return 0
