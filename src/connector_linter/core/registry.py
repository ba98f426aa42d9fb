"""Schema registry: from a document's file name to a ready schema.

Resolution steps for a file name:

1. look the (case-insensitive) name up in the identity table;
2. load the base schema, preferring the cached upstream copy over the one
   bundled with the package, and parse it as JSON5;
3. move a legacy ``id`` to ``$id``;
4. classify the dialect from ``$schema``;
5. register the schema with the compiler pool;
6. when extended validation is on and the identity names an extended
   schema, load that too and return it instead of the base.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path, PurePath
from typing import Any

from connector_linter.config.paths import Paths
from connector_linter.config.settings import ValidationSettings
from connector_linter.constants import SCHEMA_ENCODING
from connector_linter.core import parsing
from connector_linter.core.cache import ChecksumCacheStore
from connector_linter.core.compiler import CompilerPool, Dialect, dialect_for
from connector_linter.exceptions import DocumentParseError, SchemaLoadError
from connector_linter.logger import get_logger
from connector_linter.schemas import SCHEMA_MAP, SchemaIdentity, lookup_identity

logger = get_logger(__name__)


class SchemaSource(str, Enum):
    """Where a loaded schema's text came from."""

    CACHE = "cache"
    BUNDLED = "bundled"


@dataclass(frozen=True)
class LoadedSchema:
    """A parsed, normalized and registered schema.

    Attributes:
        schema_file: Basename of the schema file
        schema: Parsed schema with ``$id`` populated
        dialect: Compiler family that handles the schema
        source: Cache or bundled copy
        base: For an extended schema, the base schema it was layered on

    """

    schema_file: str
    schema: dict[str, Any]
    dialect: Dialect
    source: SchemaSource
    base: "LoadedSchema | None" = None

    @property
    def schema_id(self) -> str:
        """The schema's ``$id``."""
        return self.schema["$id"]

    @property
    def is_extended(self) -> bool:
        """True when this schema was layered over a base schema."""
        return self.base is not None


def normalize_schema_id(schema: dict[str, Any]) -> dict[str, Any]:
    """Move a legacy ``id`` to ``$id`` in place.

    Draft-04 schemas name their identifier ``id``; the compiler pool keys
    every schema on ``$id``. When both are present ``$id`` wins and ``id``
    is left alone.
    """
    if "id" in schema and "$id" not in schema:
        schema["$id"] = schema.pop("id")
    return schema


class SchemaRegistry:
    """Resolves document file names to registered schemas."""

    def __init__(
        self,
        cache_store: ChecksumCacheStore,
        compiler_pool: CompilerPool,
        bundled_dir: Path | None = None,
        table: Mapping[str, SchemaIdentity] = SCHEMA_MAP,
    ) -> None:
        """Initialize the registry.

        Args:
            cache_store: Store holding fetched upstream schemas
            compiler_pool: Pool the loaded schemas are registered with
            bundled_dir: Directory of schemas shipped with the package
            table: Identity table mapping file names to schemas

        """
        self.cache_store = cache_store
        self.compiler_pool = compiler_pool
        self.bundled_dir = bundled_dir or Paths.BUNDLED_SCHEMA_DIR
        self.table = table
        self._loaded: dict[str, LoadedSchema] = {}

    def invalidate(self) -> None:
        """Forget parsed schemas so the next resolve re-reads the files.

        Already compiled validators stay in the pool; a schema is compiled
        at most once per ``$id`` for the life of the process.
        """
        self._loaded.clear()

    def resolve(
        self, file_name: str, settings: ValidationSettings
    ) -> LoadedSchema | None:
        """Return the schema validating documents called ``file_name``.

        Returns:
            The extended schema (extended validation on and configured),
            the base schema otherwise, or None for unmapped names

        Raises:
            SchemaLoadError: If a schema file is missing or malformed
            SchemaCompileError: If the compiler pool rejects a schema

        """
        identity = lookup_identity(file_name, self.table)
        if identity is None:
            logger.debug("No schema configured for %s", file_name)
            return None

        base = self._load(identity.local_path)

        if settings.extended_validation and identity.extended_local_path:
            extended = self._load(identity.extended_local_path)
            return replace(extended, base=base)

        return base

    def _load(self, schema_path: str) -> LoadedSchema:
        schema_file = PurePath(schema_path).name
        loaded = self._loaded.get(schema_file)
        if loaded is not None:
            return loaded

        schema, source = self._read_schema(schema_file)

        if not isinstance(schema, dict):
            msg = "schema is not a JSON object"
            raise SchemaLoadError(msg, schema_file)
        normalize_schema_id(schema)
        if not isinstance(schema.get("$schema"), str):
            msg = "schema has no $schema marker"
            raise SchemaLoadError(msg, schema_file)

        self.compiler_pool.add_schema(schema)

        loaded = LoadedSchema(
            schema_file=schema_file,
            schema=schema,
            dialect=dialect_for(schema),
            source=source,
        )
        self._loaded[schema_file] = loaded
        logger.debug(
            "Loaded %s schema %s from %s",
            loaded.dialect.value,
            schema_file,
            source.value,
        )
        return loaded

    def _read_schema(self, schema_file: str) -> tuple[Any, SchemaSource]:
        """Parse the cached copy, falling back to the bundled one."""
        cached = self.cache_store.try_get(schema_file)
        if cached is not None:
            try:
                return parsing.loads(cached, schema_file), SchemaSource.CACHE
            except DocumentParseError as e:
                logger.warning("Ignoring unparsable cached schema: %s", e)

        bundled_path = self.bundled_dir / schema_file
        try:
            text = bundled_path.read_text(encoding=SCHEMA_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            msg = f"cannot read {bundled_path}: {e}"
            raise SchemaLoadError(msg, schema_file) from e

        try:
            return parsing.loads(text, schema_file), SchemaSource.BUNDLED
        except DocumentParseError as e:
            raise SchemaLoadError(e.message, schema_file) from e
