"""
Schema — Declarations, normalization and reference resolution.
"""

from objschema.schema.enums import (
    FORMAT_ERROR_CODES,
    PropertyKind,
    PropertyType,
    ViolationCode,
)
from objschema.schema.loader import create_schemas_map, load_schema, load_schemas
from objschema.schema.properties import (
    REQUIRED_MARKER,
    normalize_properties,
    normalize_required,
    normalize_source,
    property_kind,
    remove_required_and_default,
)
from objschema.schema.references import get_reference_ids
from objschema.schema.schema import UNDEFINED_SCHEMA_ID, Schema

__all__ = [
    "FORMAT_ERROR_CODES",
    "PropertyKind",
    "PropertyType",
    "ViolationCode",
    "create_schemas_map",
    "load_schema",
    "load_schemas",
    "REQUIRED_MARKER",
    "normalize_properties",
    "normalize_required",
    "normalize_source",
    "property_kind",
    "remove_required_and_default",
    "get_reference_ids",
    "UNDEFINED_SCHEMA_ID",
    "Schema",
]
