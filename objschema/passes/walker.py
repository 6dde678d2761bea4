"""
Walker — Schema-driven traversal of an object.

One traversal shared by the cleanup and normalization passes, so both
see the same recursion through references, nested objects and arrays.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from objschema.core.errors import SchemaNotFoundError
from objschema.schema.enums import PropertyKind
from objschema.schema.properties import is_enum_source, property_kind

JsonSchema = Mapping[str, Any]
JsonSchemasMap = Mapping[str, JsonSchema]

# visit(property_name, property_schema, containing_object)
Visitor = Callable[[str, Mapping[str, Any], dict], None]

# enter(containing_object, json_schema), once per object before its properties
EnterHook = Callable[[dict, JsonSchema], None]


def is_plain_object(value: Any) -> bool:
    return isinstance(value, dict)


def get_json_schema(schemas_map: JsonSchemasMap, schema_id: str) -> JsonSchema:
    json_schema = schemas_map.get(schema_id)
    if json_schema is None:
        raise SchemaNotFoundError(schema_id)
    return json_schema


def map_object_properties(
    obj: dict,
    json_schema: JsonSchema,
    schemas_map: JsonSchemasMap,
    visit: Visitor,
    enter: Optional[EnterHook] = None,
) -> None:
    """
    Call `visit` for every property declared by `json_schema`.

    Properties are visited in declaration order whether or not `obj` has
    them, so visitors can fill in defaults. Recursion follows the value
    after `visit` returns:

    - reference: resolved in `schemas_map`, entered if the value is a dict
    - object: entered with the property's own `properties` if a dict
    - array: every dict element entered with the referenced item schema
      or the inline item properties (none for a bare `{type: object}`)

    Raises:
        SchemaNotFoundError: a reference on a present value is unknown
    """
    if is_enum_source(json_schema) or not is_plain_object(obj):
        return

    properties = json_schema.get("properties")
    if properties is None:
        return

    if enter is not None:
        enter(obj, json_schema)

    schema_id = json_schema.get("id")

    for name, prop in properties.items():
        visit(name, prop, obj)

        if name not in obj:
            continue

        value = obj[name]
        kind = property_kind(prop)

        if kind is PropertyKind.REFERENCE:
            ref_schema = get_json_schema(schemas_map, prop["$ref"])
            if is_plain_object(value):
                map_object_properties(value, ref_schema, schemas_map, visit, enter)

        elif kind is PropertyKind.OBJECT:
            if is_plain_object(value):
                nested_schema = {
                    "id": f"{schema_id}.{name}.properties",
                    "properties": prop.get("properties") or {},
                }
                map_object_properties(value, nested_schema, schemas_map, visit, enter)

        elif kind is PropertyKind.ARRAY:
            items = prop.get("items")
            if not isinstance(value, list) or not items:
                continue

            if "$ref" in items:
                item_schema = get_json_schema(schemas_map, items["$ref"])
            elif items.get("properties") is not None or property_kind(items) is PropertyKind.OBJECT:
                item_schema = {
                    "id": f"{schema_id}.{name}.items.properties",
                    "properties": items.get("properties") or {},
                }
            else:
                continue

            for item in value:
                if is_plain_object(item):
                    map_object_properties(item, item_schema, schemas_map, visit, enter)
