"""Exception classes for connector-linter operations."""


class ConnectorLinterError(Exception):
    """Base exception for connector-linter operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the schema, URL or document that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class FetchError(ConnectorLinterError):
    """Raised when a remote schema cannot be downloaded."""

    error_prefix = "Fetch failed"


class SchemaLoadError(ConnectorLinterError):
    """Raised when a schema file is missing, unreadable or malformed."""

    error_prefix = "Schema load failed"


class SchemaCompileError(ConnectorLinterError):
    """Raised when a schema fails its metaschema or a keyword check."""

    error_prefix = "Schema compilation failed"


class DocumentParseError(ConnectorLinterError):
    """Raised when document text is not valid JSON5."""

    error_prefix = "Document parse failed"
