"""Schema fetcher: download upstream schemas into the checksum cache.

A fetch is a single GET with no retry and no timeout. When it fails the
cache keeps its last good copy and the registry falls back to it, or to
the schema bundled with the package.
"""

from collections.abc import Mapping
from pathlib import PurePath

import aiohttp

from connector_linter.core.cache import ChecksumCacheStore
from connector_linter.core.http_session import create_http_session
from connector_linter.exceptions import FetchError
from connector_linter.logger import get_logger
from connector_linter.schemas import SCHEMA_MAP, SchemaIdentity

logger = get_logger(__name__)


class SchemaFetcher:
    """Downloads schema text and hands it to the cache store."""

    def __init__(
        self, session: aiohttp.ClientSession, store: ChecksumCacheStore
    ) -> None:
        self.session = session
        self.store = store

    async def fetch(self, remote_url: str) -> str:
        """Download ``remote_url`` and return its text.

        Raises:
            FetchError: On a non-2xx status or any transport error

        """
        logger.debug("Fetching schema: %s", remote_url)
        try:
            async with self.session.get(remote_url) as response:
                if not 200 <= response.status < 300:  # noqa: PLR2004
                    msg = f"HTTP {response.status} {response.reason or ''}"
                    raise FetchError(msg.strip(), remote_url)
                return await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError) as e:
            raise FetchError(str(e) or type(e).__name__, remote_url) from e

    async def fetch_and_cache(self, identity: SchemaIdentity) -> bool:
        """Refresh the cached copy of one base schema.

        Returns:
            True if the cache file was (re)written

        """
        try:
            content = await self.fetch(identity.remote_url)
        except FetchError as e:
            logger.warning("%s; keeping cached or bundled copy", e)
            return False

        return self.store.put(PurePath(identity.local_path).name, content)


async def refresh_schema_cache(
    store: ChecksumCacheStore,
    session: aiohttp.ClientSession | None = None,
    table: Mapping[str, SchemaIdentity] = SCHEMA_MAP,
) -> dict[str, bool]:
    """Refresh every base schema in ``table``, one after another.

    Args:
        store: Cache store receiving the downloads
        session: Existing session; a new one is created when omitted
        table: Identity table to refresh

    Returns:
        Mapping of logical document name to "cache file written" flag

    """
    if session is None:
        async with create_http_session() as own_session:
            return await refresh_schema_cache(store, own_session, table)

    fetcher = SchemaFetcher(session, store)
    results = {}
    for name, identity in table.items():
        results[name] = await fetcher.fetch_and_cache(identity)

    logger.debug(
        "Schema cache refresh done: %d of %d updated",
        sum(results.values()),
        len(results),
    )
    return results
