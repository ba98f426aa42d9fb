"""HTTP session utilities for connector-linter."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

# Schema refreshes must never be cut short: no total, connect or read limit
NO_TIMEOUT = aiohttp.ClientTimeout(
    total=None, connect=None, sock_read=None, sock_connect=None
)


@asynccontextmanager
async def create_http_session() -> AsyncIterator[aiohttp.ClientSession]:
    """Create the HTTP session used for schema downloads.

    Yields:
        Configured aiohttp.ClientSession

    """
    connector = aiohttp.TCPConnector(limit=4, limit_per_host=2)

    async with aiohttp.ClientSession(
        timeout=NO_TIMEOUT,
        connector=connector,
        headers={"Accept": "application/json, text/plain"},
    ) as session:
        yield session
