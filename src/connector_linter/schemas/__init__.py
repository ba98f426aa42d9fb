"""Schema identity table and the schema files bundled with the package.

The ``*.schema.json`` files in this directory are the offline fallback
used when no cached upstream copy exists.
"""

from connector_linter.schemas.mappings import (
    SCHEMA_MAP,
    SchemaIdentity,
    lookup_identity,
)

__all__ = ["SCHEMA_MAP", "SchemaIdentity", "lookup_identity"]
