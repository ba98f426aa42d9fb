"""Checksum cache store for remotely fetched schema files.

Schemas downloaded from the upstream repository are kept in one flat
directory, one file per schema, holding the raw text as fetched. A file is
rewritten only when the MD5 digest of the new text differs from the digest
of what is already stored, so refreshing an unchanged schema never touches
the disk. Entries are never expired or deleted here; staleness is decided
by content, not by age.

Read and write failures are logged and reported as a miss (``try_get``) or
as "nothing written" (``put``). The store never raises for I/O problems.
"""

import contextlib
import hashlib
from pathlib import Path, PurePath

from connector_linter.constants import SCHEMA_ENCODING
from connector_linter.logger import get_logger

logger = get_logger(__name__)


def checksum(content: str) -> str:
    """Return the hex MD5 digest of ``content``.

    MD5 is used for change detection only, never for integrity against an
    attacker.
    """
    return hashlib.md5(
        content.encode(SCHEMA_ENCODING), usedforsecurity=False
    ).hexdigest()


class ChecksumCacheStore:
    """Content-addressed, write-on-change store for schema text."""

    def __init__(self, cache_dir: Path) -> None:
        """Initialize the store.

        Args:
            cache_dir: Flat directory holding cached schema files. It is
                created lazily on the first write.

        """
        self.cache_dir = Path(cache_dir)

    def path_for(self, logical_name: str) -> Path:
        """Return the cache file path for a schema.

        Only the basename of ``logical_name`` is used, so both
        ``"paconn-settings.schema.json"`` and a bundled path such as
        ``"schemas/paconn-settings.schema.json"`` map to the same file.
        """
        return self.cache_dir / PurePath(logical_name).name

    def try_get(self, logical_name: str) -> str | None:
        """Return the cached text for ``logical_name`` or None on a miss."""
        cache_file = self.path_for(logical_name)
        if not cache_file.is_file():
            return None

        try:
            content = cache_file.read_text(encoding=SCHEMA_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read cached schema %s: %s", cache_file, e)
            return None

        logger.debug("Cache hit: %s", cache_file)
        return content

    def stored_checksum(self, logical_name: str) -> str | None:
        """Return the checksum of the stored entry, or None if absent."""
        content = self.try_get(logical_name)
        return None if content is None else checksum(content)

    def put(self, logical_name: str, content: str) -> bool:
        """Store ``content`` if it differs from the cached copy.

        Args:
            logical_name: Schema file name (basename is used)
            content: Raw schema text as fetched

        Returns:
            True when the file was written, False when the stored copy
            already had the same checksum or the write failed

        """
        cache_file = self.path_for(logical_name)
        new_checksum = checksum(content)

        if self.stored_checksum(logical_name) == new_checksum:
            logger.debug("Schema unchanged, skipping write: %s", cache_file)
            return False

        temp_file = cache_file.with_suffix(cache_file.suffix + ".tmp")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            temp_file.write_text(content, encoding=SCHEMA_ENCODING)
            # rename is atomic, a reader never sees a partial file
            temp_file.replace(cache_file)
        except OSError as e:
            logger.error("Failed to write cached schema %s: %s", cache_file, e)
            with contextlib.suppress(OSError):
                temp_file.unlink()
            return False

        logger.info("Cached schema: %s", cache_file)
        return True
