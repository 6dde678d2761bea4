"""
objschema — Schema-driven validation and normalization of plain objects.

Declare object shapes as Schemas, register them in a Validator and get back
cleaned, type-coerced copies of untrusted input, or a ValidationError that
says exactly what is wrong.
"""

__version__ = "0.1.0"

from objschema.core.errors import (
    CyclicSchemaReferenceError,
    DuplicateSchemaIdError,
    NoSchemasProvidedError,
    ObjectSchemaError,
    SchemaNotFoundError,
    SchemaSetError,
    UnsupportedSchemaOperationError,
    ValidationError,
)
from objschema.core.validator import Validator
from objschema.schema import (
    UNDEFINED_SCHEMA_ID,
    Schema,
    create_schemas_map,
    load_schema,
    load_schemas,
)

__all__ = [
    "__version__",
    "Schema",
    "Validator",
    "UNDEFINED_SCHEMA_ID",
    "create_schemas_map",
    "load_schema",
    "load_schemas",
    "ObjectSchemaError",
    "NoSchemasProvidedError",
    "DuplicateSchemaIdError",
    "SchemaSetError",
    "CyclicSchemaReferenceError",
    "SchemaNotFoundError",
    "UnsupportedSchemaOperationError",
    "ValidationError",
]
