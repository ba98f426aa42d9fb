"""Dialect-aware compiler pool.

Two independent compilers are kept, one per dialect:

- legacy: draft-04 schemas (``$schema`` mentions ``draft-04``), compiled
  with ``Draft4Validator``;
- modern: everything else, compiled with the validator class matching
  ``$schema`` (``Draft7Validator`` when it is unknown or missing).

Both compilers know the custom keywords from ``predicates`` and check
formats with their class's format checker. Each compiler keeps its own
``referencing.Registry`` of added schemas so an extended schema can
``$ref`` the base schema by its ``$id``.

A schema is added at most once per ``$id`` and compiled at most once per
``(dialect, $id)``; the pool owns every compiled handle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urldefrag

from jsonschema import Draft4Validator, Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.protocols import Validator
from jsonschema.validators import extend, validator_for
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT4, DRAFT7

from connector_linter.constants import LEGACY_DRAFT_MARKER
from connector_linter.core.predicates import (
    iter_keyword_uses,
    keyword_validators,
)
from connector_linter.exceptions import SchemaCompileError
from connector_linter.logger import get_logger

logger = get_logger(__name__)


class Dialect(str, Enum):
    """JSON Schema dialect families handled by separate compilers."""

    LEGACY = "legacy"
    MODERN = "modern"


def dialect_for(schema: dict[str, Any]) -> Dialect:
    """Classify a schema by its ``$schema`` marker alone."""
    marker = schema.get("$schema")
    if isinstance(marker, str) and LEGACY_DRAFT_MARKER in marker:
        return Dialect.LEGACY
    return Dialect.MODERN


def _error_sort_key(error: ValidationError) -> tuple:
    return (
        [str(part) for part in error.absolute_path],
        error.message,
    )


@dataclass(frozen=True)
class ValidatorHandle:
    """Compiled validator for one ``(dialect, $id)`` pair."""

    dialect: Dialect
    schema_id: str
    validator: Validator

    def __call__(self, instance: Any) -> list[ValidationError]:
        """Validate ``instance`` and return every error, in stable order.

        Raises:
            SchemaCompileError: If the schema has a ``$ref`` that no
                registered schema satisfies. References resolve lazily,
                so this only surfaces while validating.

        """
        try:
            return sorted(
                self.validator.iter_errors(instance), key=_error_sort_key
            )
        except Unresolvable as e:
            msg = f"unresolvable reference: {e}"
            raise SchemaCompileError(msg, self.schema_id) from e

    def is_valid(self, instance: Any) -> bool:
        """Return True if ``instance`` produces no errors."""
        return not self(instance)


class DialectCompiler:
    """Schema store and compiler for one dialect."""

    def __init__(
        self,
        dialect: Dialect,
        default_class: type[Validator],
        default_specification,
        *,
        select_by_schema: bool,
    ) -> None:
        """Initialize an empty compiler.

        Args:
            dialect: Dialect this compiler serves
            default_class: Validator class used for every schema (legacy)
                or when ``$schema`` is unknown (modern)
            default_specification: ``referencing`` specification used when
                a schema's dialect cannot be detected
            select_by_schema: Pick the validator class from ``$schema``

        """
        self.dialect = dialect
        self._default_class = default_class
        self._default_specification = default_specification
        self._select_by_schema = select_by_schema
        self._registry: Registry = Registry()
        self._schemas: dict[str, dict[str, Any]] = {}
        self._classes: dict[type[Validator], type[Validator]] = {}

    def has_schema(self, schema_id: str) -> bool:
        """Return True if a schema with ``schema_id`` was added."""
        return schema_id in self._schemas

    def _validator_class(self, schema: dict[str, Any]) -> type[Validator]:
        """Return the keyword-extended validator class for ``schema``."""
        base = self._default_class
        if self._select_by_schema:
            base = validator_for(schema, default=self._default_class)

        if base not in self._classes:
            self._classes[base] = extend(base, validators=keyword_validators())
        return self._classes[base]

    def add_schema(self, schema: dict[str, Any]) -> bool:
        """Check and register a schema.

        Adding a schema whose ``$id`` is already known is a no-op.

        Returns:
            True if the schema was added, False if it was already present

        Raises:
            SchemaCompileError: If the schema has no ``$id``, fails its
                metaschema, or uses a custom keyword with a bad parameter

        """
        schema_id = schema.get("$id")
        if not isinstance(schema_id, str) or not schema_id:
            msg = "schema has no $id"
            raise SchemaCompileError(msg, schema.get("title"))
        if schema_id in self._schemas:
            return False

        validator_class = self._validator_class(schema)
        try:
            validator_class.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(e.message, schema_id) from e

        for predicate, parameter, pointer in iter_keyword_uses(schema):
            problems = predicate.parameter_errors(parameter)
            if problems:
                msg = f"{predicate.keyword} at '{pointer}': {problems[0]}"
                raise SchemaCompileError(msg, schema_id)

        resource = Resource.from_contents(
            schema, default_specification=self._default_specification
        )
        self._registry = self._registry.with_resource(
            uri=urldefrag(schema_id).url, resource=resource
        )
        self._schemas[schema_id] = schema
        logger.debug("Registered %s schema %s", self.dialect.value, schema_id)
        return True

    def compile(self, schema_id: str) -> ValidatorHandle:
        """Compile a registered schema into a handle.

        Raises:
            SchemaCompileError: If no schema with ``schema_id`` was added

        """
        schema = self._schemas.get(schema_id)
        if schema is None:
            msg = f"schema is not registered with the {self.dialect.value} compiler"
            raise SchemaCompileError(msg, schema_id)

        validator_class = self._validator_class(schema)
        validator = validator_class(
            schema,
            registry=self._registry,
            format_checker=validator_class.FORMAT_CHECKER,
        )
        logger.debug("Compiled %s schema %s", self.dialect.value, schema_id)
        return ValidatorHandle(self.dialect, schema_id, validator)


class CompilerPool:
    """Owns one compiler per dialect and every compiled validator."""

    def __init__(self) -> None:
        self._compilers = {
            Dialect.LEGACY: DialectCompiler(
                Dialect.LEGACY,
                Draft4Validator,
                DRAFT4,
                select_by_schema=False,
            ),
            Dialect.MODERN: DialectCompiler(
                Dialect.MODERN,
                Draft7Validator,
                DRAFT7,
                select_by_schema=True,
            ),
        }
        self._handles: dict[tuple[Dialect, str], ValidatorHandle] = {}

    @property
    def compiled_count(self) -> int:
        """Number of compiled validators held by the pool."""
        return len(self._handles)

    def compiler(self, dialect: Dialect) -> DialectCompiler:
        """Return the compiler serving ``dialect``."""
        return self._compilers[dialect]

    def add_schema(self, schema: dict[str, Any]) -> bool:
        """Register ``schema`` with the compiler its dialect selects."""
        return self._compilers[dialect_for(schema)].add_schema(schema)

    def get_validator(
        self, dialect: Dialect, schema: dict[str, Any]
    ) -> ValidatorHandle:
        """Return the compiled validator for ``schema``, compiling it once.

        Raises:
            SchemaCompileError: If ``dialect`` disagrees with the schema's
                own marker, or compilation fails

        """
        declared = dialect_for(schema)
        if declared is not dialect:
            msg = (
                f"schema declares the {declared.value} dialect, "
                f"not {dialect.value}"
            )
            raise SchemaCompileError(msg, schema.get("$id"))

        compiler = self._compilers[dialect]
        compiler.add_schema(schema)

        key = (dialect, schema["$id"])
        handle = self._handles.get(key)
        if handle is None:
            handle = compiler.compile(schema["$id"])
            self._handles[key] = handle
        return handle
