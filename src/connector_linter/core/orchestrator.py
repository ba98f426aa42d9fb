"""Validation orchestrator: one document in, one diagnostic set out.

``validate`` returns a list that replaces whatever was published for the
document before, or None when the document must be left alone (unmapped
file name, schema that cannot be loaded, compiled or have its references
resolved). Every failure short of a crash ends as "not validated this
round".
"""

import re
from pathlib import Path
from urllib.parse import unquote, urlparse

from connector_linter.config.settings import SettingsContext
from connector_linter.core import parsing
from connector_linter.core.cache import ChecksumCacheStore
from connector_linter.core.compiler import CompilerPool
from connector_linter.core.diagnostics import (
    Diagnostic,
    diagnostic_from_error,
)
from connector_linter.core.registry import SchemaRegistry
from connector_linter.exceptions import (
    DocumentParseError,
    SchemaCompileError,
    SchemaLoadError,
)
from connector_linter.logger import get_logger

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[\\/]")


def document_file_name(uri: str) -> str:
    """Lower-cased basename of a document URI or plain path."""
    parsed = urlparse(uri)
    path = unquote(parsed.path) if parsed.scheme == "file" else uri
    return _SEPARATORS.split(path)[-1].lower()


class ValidationOrchestrator:
    """Resolves, compiles and runs the schema for a document."""

    def __init__(
        self,
        registry: SchemaRegistry,
        compiler_pool: CompilerPool,
        settings_context: SettingsContext,
    ) -> None:
        self.registry = registry
        self.compiler_pool = compiler_pool
        self.settings_context = settings_context

    @classmethod
    def create_default(
        cls,
        cache_dir: Path,
        settings_context: SettingsContext | None = None,
        bundled_dir: Path | None = None,
    ) -> "ValidationOrchestrator":
        """Wire up a cache store, compiler pool and registry.

        Args:
            cache_dir: Directory of fetched upstream schemas
            settings_context: Settings holder (defaults to fresh settings)
            bundled_dir: Override for the bundled schema directory

        """
        compiler_pool = CompilerPool()
        registry = SchemaRegistry(
            ChecksumCacheStore(cache_dir),
            compiler_pool,
            bundled_dir=bundled_dir,
        )
        return cls(registry, compiler_pool, settings_context or SettingsContext())

    def validate(self, uri: str, text: str) -> list[Diagnostic] | None:
        """Validate one document.

        Args:
            uri: Document URI (``file://`` URI or plain path)
            text: Full document text

        Returns:
            Diagnostics replacing the previous set (empty when the document
            is valid or unparsable), or None when nothing should change

        """
        file_name = document_file_name(uri)

        try:
            schema = self.registry.resolve(
                file_name, self.settings_context.settings
            )
            if schema is None:
                logger.debug("Skipping unmapped document %s", uri)
                return None
            handle = self.compiler_pool.get_validator(
                schema.dialect, schema.schema
            )
        except (SchemaLoadError, SchemaCompileError) as e:
            logger.error("Skipping validation of %s: %s", uri, e)
            return None

        try:
            data = parsing.loads(text, file_name)
        except DocumentParseError as e:
            logger.warning("Clearing diagnostics for %s: %s", uri, e)
            return []

        try:
            errors = handle(data)
        except SchemaCompileError as e:
            logger.error("Skipping validation of %s: %s", uri, e)
            return None

        diagnostics = [
            diagnostic_from_error(uri, text, error) for error in errors
        ]
        logger.debug(
            "Validated %s against %s: %d problem(s)",
            uri,
            schema.schema_id,
            len(diagnostics),
        )
        return diagnostics
