"""Schema identity table.

Maps the lower-cased file name of a connector document to the schema that
validates it: where to download the upstream copy, which file ships with
the package, and the optional stricter schema layered on top.
"""

from dataclasses import dataclass
from pathlib import PurePath
from types import MappingProxyType

from connector_linter.constants import SCHEMA_BASE_URL


@dataclass(frozen=True)
class SchemaIdentity:
    """Where the schema for one kind of connector document lives."""

    remote_url: str
    local_path: str
    extended_local_path: str | None = None
    dialect_hint: str | None = None


SCHEMA_MAP = MappingProxyType(
    {
        "settings.json": SchemaIdentity(
            remote_url=f"{SCHEMA_BASE_URL}/paconn-settings.schema.json",
            local_path="paconn-settings.schema.json",
            dialect_hint="modern",
        ),
        "apiproperties.json": SchemaIdentity(
            remote_url=f"{SCHEMA_BASE_URL}/paconn-apiProperties.schema.json",
            local_path="paconn-apiProperties.schema.json",
            extended_local_path="paconn-apiProperties.extended.schema.json",
            dialect_hint="modern",
        ),
        "apidefinition.swagger.json": SchemaIdentity(
            remote_url=f"{SCHEMA_BASE_URL}/apiDefinition.swagger.schema.json",
            local_path="apiDefinition.swagger.schema.json",
            extended_local_path="apiDefinition.swagger.extended.schema.json",
            dialect_hint="legacy",
        ),
    }
)


def lookup_identity(
    file_name: str, table=SCHEMA_MAP
) -> SchemaIdentity | None:
    """Return the identity for a document file name, ignoring case.

    Directory components are dropped, so a full path works as well.
    """
    return table.get(PurePath(file_name).name.lower())
