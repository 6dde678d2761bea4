"""
Schema Enums — Property kinds, declared types and violation codes.

No stringly-typed constants scattered across passes.
"""

from enum import Enum


class PropertyKind(str, Enum):
    """
    Variant of a property descriptor.

    Discriminated by presence of `$ref`, then `enum`, then `type`:
    - REFERENCE: delegates its shape to another schema
    - ENUM: a closed set of string/number values
    - OBJECT: nested properties bag
    - ARRAY: items schema
    - SCALAR: string, number, integer or boolean
    """

    REFERENCE = "reference"
    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


class PropertyType(str, Enum):
    """Declared `type` values understood by the normalizer."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class ViolationCode(str, Enum):
    """Codes reported for constraint violations."""

    INVALID_TYPE = "INVALID_TYPE"
    ENUM_MISMATCH = "ENUM_MISMATCH"
    PATTERN = "PATTERN"
    INVALID_FORMAT = "INVALID_FORMAT"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    MINIMUM = "MINIMUM"
    MAXIMUM = "MAXIMUM"
    MULTIPLE_OF = "MULTIPLE_OF"
    OBJECT_MISSING_REQUIRED_PROPERTY = "OBJECT_MISSING_REQUIRED_PROPERTY"
    OBJECT_ADDITIONAL_PROPERTIES = "OBJECT_ADDITIONAL_PROPERTIES"
    OBJECT_PROPERTIES_MINIMUM = "OBJECT_PROPERTIES_MINIMUM"
    OBJECT_PROPERTIES_MAXIMUM = "OBJECT_PROPERTIES_MAXIMUM"
    OBJECT_DEPENDENCY_KEY = "OBJECT_DEPENDENCY_KEY"
    ARRAY_LENGTH_SHORT = "ARRAY_LENGTH_SHORT"
    ARRAY_LENGTH_LONG = "ARRAY_LENGTH_LONG"
    ARRAY_UNIQUE = "ARRAY_UNIQUE"
    ANY_OF_MISSING = "ANY_OF_MISSING"
    ONE_OF_MISSING = "ONE_OF_MISSING"
    NOT_PASSED = "NOT_PASSED"


# Violations the nullify pass may clear for empty, non-required values
FORMAT_ERROR_CODES = frozenset({
    ViolationCode.PATTERN.value,
    ViolationCode.ENUM_MISMATCH.value,
    ViolationCode.INVALID_FORMAT.value,
})
