"""
Pass 10 — Attribute Cleanup

Drops every key the schema does not declare, recursing through
references, nested objects and arrays of objects.
"""

from typing import Any, Mapping

from objschema.core.context import ValidationContext
from objschema.core.logging import get_pass_logger
from objschema.passes.walker import JsonSchemasMap, map_object_properties

PASS_NAME = "p10_cleanup_attributes"
log = get_pass_logger(PASS_NAME)


def cleanup_attributes(
    obj: dict,
    json_schema: Mapping[str, Any],
    schemas_map: JsonSchemasMap,
) -> list[str]:
    """
    Remove undeclared keys from `obj` in place.

    Returns:
        Dotted names of the removed keys, relative to the schema ids
    """
    removed: list[str] = []

    def drop_undeclared(container: dict, container_schema: Mapping[str, Any]) -> None:
        declared = container_schema["properties"]
        for key in [key for key in container if key not in declared]:
            del container[key]
            removed.append(f"{container_schema.get('id')}.{key}")

    def ignore(name: str, prop: Mapping[str, Any], container: dict) -> None:
        pass

    map_object_properties(obj, json_schema, schemas_map, ignore, enter=drop_undeclared)
    return removed


def drop_attributes(ctx: ValidationContext) -> ValidationContext:
    """Remove undeclared keys from the context object."""
    removed = cleanup_attributes(ctx.object, ctx.json_schema, ctx.json_schemas_map)

    if removed:
        log.verbose("attributes_removed", schema_id=ctx.schema_id, removed=removed)

    ctx.add_trace(PASS_NAME)
    return ctx
