"""Schema resolution and validation engine."""

from connector_linter.core.cache import ChecksumCacheStore, checksum
from connector_linter.core.compiler import (
    CompilerPool,
    Dialect,
    ValidatorHandle,
    dialect_for,
)
from connector_linter.core.diagnostics import (
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
)
from connector_linter.core.fetcher import SchemaFetcher, refresh_schema_cache
from connector_linter.core.lifecycle import (
    CollectingPublisher,
    ConfigurationChanged,
    DiagnosticsPublisher,
    DocumentChanged,
    DocumentClosed,
    DocumentLifecycleController,
    DocumentOpened,
    DocumentSaved,
    WatchedFilesChanged,
)
from connector_linter.core.orchestrator import ValidationOrchestrator
from connector_linter.core.registry import LoadedSchema, SchemaRegistry

__all__ = [
    "ChecksumCacheStore",
    "CollectingPublisher",
    "CompilerPool",
    "ConfigurationChanged",
    "Diagnostic",
    "DiagnosticSeverity",
    "DiagnosticsPublisher",
    "Dialect",
    "DocumentChanged",
    "DocumentClosed",
    "DocumentLifecycleController",
    "DocumentOpened",
    "DocumentSaved",
    "LoadedSchema",
    "Position",
    "Range",
    "SchemaFetcher",
    "SchemaRegistry",
    "ValidationOrchestrator",
    "ValidatorHandle",
    "WatchedFilesChanged",
    "checksum",
    "dialect_for",
]
