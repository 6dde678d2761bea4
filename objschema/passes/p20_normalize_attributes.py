"""
Pass 20 — Attribute Normalization

Applies declared defaults to absent keys and coerces loosely typed
values to the declared property type:
- number/integer: numeric strings ("180", "1.5", "1e3") and booleans
- boolean: numbers and "true"/"yes"/"1", "false"/"no"/"0" strings

Values that cannot be coerced are left alone; the constraint check
reports them.
"""

import copy
import math
import re
from typing import Any, Mapping

from objschema.core.context import ValidationContext
from objschema.core.logging import get_pass_logger
from objschema.passes.walker import JsonSchemasMap, map_object_properties
from objschema.schema.enums import PropertyType

PASS_NAME = "p20_normalize_attributes"
log = get_pass_logger(PASS_NAME)

BOOLEAN_TRUE_STRINGS = ("yes", "true", "1")
BOOLEAN_FALSE_STRINGS = ("no", "false", "0")

NUMERIC_TYPES = (PropertyType.NUMBER.value, PropertyType.INTEGER.value)

_INTEGER_RE = re.compile(r"^\s*[-+]?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$")


def _to_number(value: str) -> Any:
    try:
        if _INTEGER_RE.match(value):
            return int(value)
        if _FLOAT_RE.match(value):
            number = float(value)
            if math.isfinite(number):
                # "30.0" and "1e3" must satisfy integer properties
                return int(number) if number.is_integer() else number
    except ValueError:
        # int() refuses digit strings above sys.get_int_max_str_digits()
        pass
    return value


def normalize_type(declared_type: str, value: Any) -> Any:
    """
    Coerce `value` to `declared_type` where the conversion is unambiguous.

    None is preserved for every type; string, object and array types are
    never converted.
    """
    if value is None:
        return value

    if declared_type in NUMERIC_TYPES:
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, str) and value.strip():
            return _to_number(value)
        return value

    if declared_type == PropertyType.BOOLEAN.value:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in BOOLEAN_TRUE_STRINGS:
                return True
            if lowered in BOOLEAN_FALSE_STRINGS:
                return False
        return value

    return value


def normalize_attributes(
    obj: dict,
    json_schema: Mapping[str, Any],
    schemas_map: JsonSchemasMap,
) -> None:
    """Apply defaults and type coercion to `obj` in place."""

    def normalize_value(name: str, prop: Mapping[str, Any], container: dict) -> None:
        if name not in container and "default" in prop:
            container[name] = copy.deepcopy(prop["default"])

        declared_type = prop.get("type")
        if declared_type and name in container:
            container[name] = normalize_type(declared_type, container[name])

    map_object_properties(obj, json_schema, schemas_map, normalize_value)


def coerce_attributes(ctx: ValidationContext) -> ValidationContext:
    """Apply defaults and type coercion to the context object."""
    normalize_attributes(ctx.object, ctx.json_schema, ctx.json_schemas_map)

    log.debug("attributes_normalized", schema_id=ctx.schema_id)

    ctx.add_trace(PASS_NAME)
    return ctx
