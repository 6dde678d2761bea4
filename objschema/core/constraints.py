"""
Constraints — Adapter around the jsonschema constraint engine.

Schemas are registered under their ids in a `referencing` registry so that
`{"$ref": "Status"}` resolves to the schema with id "Status". Violations
come back as ConstraintViolation records with a path, a code, parameters
and the engine's message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping
from urllib.parse import urlsplit

from jsonschema import Draft4Validator, FormatChecker
from jsonschema.exceptions import ValidationError as EngineError
from referencing import Registry
from referencing.jsonschema import DRAFT4

from objschema.core.errors import SchemaNotFoundError
from objschema.schema.enums import ViolationCode

URL_SCHEMES = ("http", "https", "ftp", "ftps")

FORMAT_CHECKER = FormatChecker()


@FORMAT_CHECKER.checks("url")
def is_url(instance: Any) -> bool:
    if not isinstance(instance, str):
        return True
    parts = urlsplit(instance)
    return parts.scheme in URL_SCHEMES and bool(parts.netloc)


# jsonschema keyword -> violation code
_KEYWORD_CODES = {
    "type": ViolationCode.INVALID_TYPE,
    "enum": ViolationCode.ENUM_MISMATCH,
    "pattern": ViolationCode.PATTERN,
    "format": ViolationCode.INVALID_FORMAT,
    "minLength": ViolationCode.MIN_LENGTH,
    "maxLength": ViolationCode.MAX_LENGTH,
    "minimum": ViolationCode.MINIMUM,
    "maximum": ViolationCode.MAXIMUM,
    "multipleOf": ViolationCode.MULTIPLE_OF,
    "required": ViolationCode.OBJECT_MISSING_REQUIRED_PROPERTY,
    "additionalProperties": ViolationCode.OBJECT_ADDITIONAL_PROPERTIES,
    "minProperties": ViolationCode.OBJECT_PROPERTIES_MINIMUM,
    "maxProperties": ViolationCode.OBJECT_PROPERTIES_MAXIMUM,
    "dependencies": ViolationCode.OBJECT_DEPENDENCY_KEY,
    "minItems": ViolationCode.ARRAY_LENGTH_SHORT,
    "maxItems": ViolationCode.ARRAY_LENGTH_LONG,
    "uniqueItems": ViolationCode.ARRAY_UNIQUE,
    "anyOf": ViolationCode.ANY_OF_MISSING,
    "oneOf": ViolationCode.ONE_OF_MISSING,
    "not": ViolationCode.NOT_PASSED,
}


@dataclass(frozen=True)
class ConstraintViolation:
    """One failed constraint, located in the checked object."""

    path: str
    code: str
    message: str
    params: tuple[str, ...] = ()
    path_parts: tuple[Any, ...] = ()

    # Failing sub-schema and offending value; not part of the serialized error
    schema: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    value: Any = field(default=None, repr=False, compare=False)


def format_path(parts: Iterable[Any]) -> str:
    """`("locations", 0, "name")` -> `'#/locations/0/name'`."""
    return "#/" + "/".join(str(part) for part in parts)


def json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _missing_property(error: EngineError) -> str:
    for name in error.validator_value:
        if name not in error.instance and error.message.startswith(repr(name)):
            return name
    return error.message


def _params(error: EngineError) -> tuple[str, ...]:
    keyword = error.validator

    if keyword == "required":
        return (_missing_property(error),)
    if keyword == "type":
        return (str(error.validator_value), json_type(error.instance))
    if keyword == "enum":
        return (str(error.instance),)
    if keyword in ("pattern", "format"):
        return (str(error.validator_value), str(error.instance))
    if keyword in ("minLength", "maxLength") and isinstance(error.instance, str):
        return (str(len(error.instance)), str(error.validator_value))
    return (str(error.validator_value),)


def to_violation(error: EngineError) -> ConstraintViolation:
    """Translate a jsonschema error into a ConstraintViolation."""
    keyword = str(error.validator)
    code = _KEYWORD_CODES.get(keyword)
    parts = tuple(error.absolute_path)

    return ConstraintViolation(
        path=format_path(parts),
        code=code.value if code else keyword.upper(),
        message=error.message,
        params=_params(error),
        path_parts=parts,
        schema=error.schema if isinstance(error.schema, Mapping) else {},
        value=error.instance,
    )


class ConstraintEngine:
    """
    Checks objects against a fixed set of json schemas.

    Args:
        json_schemas: Map of schema id -> constraint-engine schema
    """

    def __init__(self, json_schemas: Mapping[str, Mapping[str, Any]]) -> None:
        self._json_schemas = dict(json_schemas)
        self._registry = Registry().with_resources(
            (schema_id, DRAFT4.create_resource(json_schema))
            for schema_id, json_schema in self._json_schemas.items()
        )
        self._validators = {
            schema_id: Draft4Validator(
                json_schema,
                registry=self._registry,
                format_checker=FORMAT_CHECKER,
            )
            for schema_id, json_schema in self._json_schemas.items()
        }

    @staticmethod
    def check_schema(json_schema: Mapping[str, Any]) -> list[dict[str, Any]]:
        """
        Structural problems of a schema against the Draft 4 meta-schema.

        Returns:
            List of `{schemaId, path, message}` dicts (empty if valid)
        """
        meta_validator = Draft4Validator(Draft4Validator.META_SCHEMA)
        return [
            {
                "schemaId": json_schema.get("id"),
                "path": format_path(error.absolute_path),
                "message": error.message,
            }
            for error in meta_validator.iter_errors(json_schema)
        ]

    def _validator(self, schema_id: str) -> Draft4Validator:
        validator = self._validators.get(schema_id)
        if validator is None:
            raise SchemaNotFoundError(schema_id)
        return validator

    def validate(self, obj: Any, schema_id: str) -> list[ConstraintViolation]:
        """
        Check `obj` against the schema registered as `schema_id`.

        Returns:
            Violations ordered by path (empty if valid)
        """
        errors = sorted(
            self._validator(schema_id).iter_errors(obj),
            key=lambda error: (format_path(error.absolute_path), error.message),
        )
        return [to_violation(error) for error in errors]
