"""Custom schema keywords for connector certification rules.

Stock JSON Schema cannot express rules such as "a description must be a
sentence" or "categories must come from the published list". Each rule is a
``Predicate``: a keyword name as it appears in schema files, a metaschema
describing the keyword's own parameter, a check and an error message.

The catalog is fixed and registered once per compiler by
``keyword_validators()``. A predicate that is handed a value of the wrong
type (say a number where it checks strings) passes; type errors are the
job of the schema's ``type`` keyword.
"""

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

ALLOWED_CATEGORIES = (
    "AI",
    "Business Management",
    "Business Intelligence",
    "Collaboration",
    "Commerce",
    "Communication",
    "Content and Files",
    "Finance",
    "Data",
    "Human Resources",
    "Internet of Things",
    "IT Operations",
    "Lifestyle and Entertainment",
    "Marketing",
    "Productivity",
    "Sales and CRM",
    "Security",
    "Social Media",
    "Website",
)

CATEGORIES_PROPERTY = "Categories"

SENTENCE_TERMINATORS = (".", "!", "?")

_CAPITAL_START = re.compile(r"[A-Z]")
_ENGLISH_CHARSET = re.compile(r"[A-Za-z0-9 .,;:'\"?!\-/()]+")
_PASCAL_CASE = re.compile(r"[A-Z][a-z0-9]+(?:[A-Z][a-z0-9]+)*")

_BOOLEAN_FLAG = MappingProxyType({"type": "boolean"})


@dataclass(frozen=True)
class Predicate:
    """One custom keyword.

    Attributes:
        name: Descriptive name of the rule
        keyword: Keyword used in schema files
        metaschema: Draft-07 schema for the keyword's parameter
        check: ``(value, parameter) -> bool``, True when the value passes
        message: ``parameter -> str`` rendering the error message
        applies_to: Runtime types the check understands

    """

    name: str
    keyword: str
    metaschema: Mapping[str, Any]
    check: Callable[[Any, Any], bool]
    message: Callable[[Any], str]
    applies_to: tuple[type, ...] = field(default=(str,))

    @cached_property
    def parameter_validator(self) -> Draft7Validator:
        """Validator for the keyword's parameter."""
        return Draft7Validator(dict(self.metaschema))

    def evaluate(self, value: Any, parameter: Any) -> str | None:
        """Run the check.

        Returns:
            The error message on failure, None on success

        """
        if parameter is False:
            return None
        if not isinstance(value, self.applies_to):
            return None
        if self.check(value, parameter):
            return None
        return self.message(parameter)

    def parameter_errors(self, parameter: Any) -> list[str]:
        """Return messages for every way ``parameter`` breaks the metaschema."""
        return [
            error.message
            for error in self.parameter_validator.iter_errors(parameter)
        ]


def _sentence_ok(value: str, parameter: Mapping[str, Any]) -> bool:
    if len(value.split()) < parameter["minWords"]:
        return False
    return not (
        parameter["endWithPunctuation"]
        and not value.endswith(SENTENCE_TERMINATORS)
    )


def _sentence_message(parameter: Mapping[str, Any]) -> str:
    suffix = " and end in punctuation" if parameter["endWithPunctuation"] else ""
    return (
        "Must be a descriptive sentence with at least "
        f"{parameter['minWords']} words{suffix}."
    )


def _categories_ok(value: list, _parameter: Any) -> bool:
    """Check the first ``Categories`` metadata entry against the allow-list.

    Entries are ``{"propertyName": ..., "propertyValue": ...}`` records;
    the value is a ``;``-separated list of category names.
    """
    entry = next(
        (
            item
            for item in value
            if isinstance(item, dict)
            and item.get("propertyName") == CATEGORIES_PROPERTY
        ),
        None,
    )
    if entry is None or not isinstance(entry.get("propertyValue"), str):
        return True

    return all(
        token.strip() in ALLOWED_CATEGORIES
        for token in entry["propertyValue"].split(";")
    )


SENTENCE_QUALITY = Predicate(
    name="sentence-quality",
    keyword="validSentenceWithPunctuation",
    metaschema={
        "type": "object",
        "properties": {
            "minWords": {"type": "integer", "minimum": 1},
            "endWithPunctuation": {"type": "boolean"},
        },
        "required": ["minWords", "endWithPunctuation"],
        "additionalProperties": False,
    },
    check=_sentence_ok,
    message=_sentence_message,
)

CAPITALIZED_START = Predicate(
    name="capitalized-start",
    keyword="startsWithCapital",
    metaschema=_BOOLEAN_FLAG,
    check=lambda value, _: _CAPITAL_START.match(value) is not None,
    message=lambda _: "String must start with a capital letter.",
)

FORBIDDEN_WORDS = Predicate(
    name="forbidden-words",
    keyword="forbiddenWords",
    metaschema={"type": "array", "items": {"type": "string"}},
    check=lambda value, words: not any(word in value for word in words),
    message=lambda words: (
        "The string must not include any of the following words: "
        + ", ".join(words)
    ),
)

ASCII_ENGLISH_CHARSET = Predicate(
    name="ascii-english-charset",
    keyword="isEnglish",
    metaschema=_BOOLEAN_FLAG,
    check=lambda value, _: _ENGLISH_CHARSET.fullmatch(value) is not None,
    message=lambda _: "The string must be in English",
)

ENUM_MEMBERSHIP = Predicate(
    name="enum-membership",
    keyword="dynamicEnumCheck",
    metaschema={
        "type": "object",
        "properties": {
            "enum": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
            },
        },
        "required": ["enum"],
    },
    check=lambda value, parameter: value in parameter["enum"],
    message=lambda parameter: (
        "The value must be one of the following: "
        + ", ".join(parameter["enum"])
    ),
)

OPERATION_ID_CASING = Predicate(
    name="operation-id-casing",
    keyword="validateOperationId",
    metaschema=_BOOLEAN_FLAG,
    check=lambda value, _: _PASCAL_CASE.fullmatch(value) is not None,
    message=lambda _: (
        "OperationId must be in PascalCase without hyphens or underscores"
    ),
)

CATEGORY_MEMBERSHIP = Predicate(
    name="category-membership",
    keyword="validateCategories",
    metaschema=_BOOLEAN_FLAG,
    check=_categories_ok,
    message=lambda _: (
        "Categories must be one of the following: "
        + ", ".join(ALLOWED_CATEGORIES)
    ),
    applies_to=(list,),
)

PREDICATES: Mapping[str, Predicate] = MappingProxyType(
    {
        predicate.keyword: predicate
        for predicate in (
            SENTENCE_QUALITY,
            CAPITALIZED_START,
            FORBIDDEN_WORDS,
            ASCII_ENGLISH_CHARSET,
            ENUM_MEMBERSHIP,
            OPERATION_ID_CASING,
            CATEGORY_MEMBERSHIP,
        )
    }
)


def _keyword_function(predicate: Predicate):
    def validate(validator, parameter, instance, schema):
        message = predicate.evaluate(instance, parameter)
        if message is not None:
            yield ValidationError(message)

    validate.__name__ = predicate.keyword
    return validate


def keyword_validators() -> dict[str, Callable]:
    """Keyword functions in the form ``jsonschema.validators.extend`` takes."""
    return {
        keyword: _keyword_function(predicate)
        for keyword, predicate in PREDICATES.items()
    }


# Keywords whose object value maps names to subschemas
_NAME_MAP_KEYWORDS = frozenset(
    {
        "properties",
        "patternProperties",
        "definitions",
        "$defs",
        "dependencies",
        "dependentSchemas",
    }
)
# Keywords whose value is instance data, never a schema
_DATA_KEYWORDS = frozenset({"enum", "const", "default", "examples", "required"})


def _escape_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def iter_keyword_uses(
    schema: Any, pointer: str = ""
) -> Iterator[tuple[Predicate, Any, str]]:
    """Yield ``(predicate, parameter, pointer)`` for each custom keyword.

    Walks subschemas only: property names and instance data (``enum``,
    ``default`` and friends) are skipped so a property that happens to be
    called ``isEnglish`` is not mistaken for the keyword.
    """
    if isinstance(schema, list):
        for index, item in enumerate(schema):
            yield from iter_keyword_uses(item, f"{pointer}/{index}")
        return
    if not isinstance(schema, dict):
        return

    for key, value in schema.items():
        child = f"{pointer}/{_escape_pointer(key)}"
        if key in PREDICATES:
            yield PREDICATES[key], value, child
        elif key in _DATA_KEYWORDS:
            continue
        elif key in _NAME_MAP_KEYWORDS and isinstance(value, dict):
            for name, subschema in value.items():
                yield from iter_keyword_uses(
                    subschema, f"{child}/{_escape_pointer(name)}"
                )
        else:
            yield from iter_keyword_uses(value, child)
