"""
References — Transitive `$ref` resolution over declared schema shapes.
"""

from __future__ import annotations

from typing import Mapping

from objschema.core.errors import CyclicSchemaReferenceError, SchemaNotFoundError
from objschema.core.logging import LogChannel, get_logger
from objschema.schema.enums import PropertyKind
from objschema.schema.properties import property_kind
from objschema.schema.schema import Schema

log = get_logger(LogChannel.SCHEMA)


def _append_unique(target: list[str], ids: list[str]) -> None:
    for schema_id in ids:
        if schema_id not in target:
            target.append(schema_id)


def _resolve(
    schema_id: str,
    schemas_map: Mapping[str, Schema],
    referenced_by: str,
    stack: tuple[str, ...],
) -> Schema:
    if schema_id in stack:
        raise CyclicSchemaReferenceError([*stack, schema_id])

    schema = schemas_map.get(schema_id)
    if schema is None:
        raise SchemaNotFoundError(schema_id, referenced_by)
    return schema


def get_reference_ids(
    schema: Schema,
    schemas_map: Mapping[str, Schema],
    _stack: tuple[str, ...] = (),
) -> list[str]:
    """
    Collect ids of all schemas `schema` references, transitively.

    Follows references on properties, nested object properties, array item
    references and inline array item objects. The result keeps first
    discovery order without duplicates.

    Raises:
        SchemaNotFoundError: a referenced id is not in `schemas_map`
        CyclicSchemaReferenceError: a schema (indirectly) references itself
    """
    if schema.is_enum:
        return []

    stack = (*_stack, schema.id)
    json_schema = schema.json_schema
    reference_ids: list[str] = []

    for name, prop in json_schema["properties"].items():
        kind = property_kind(prop)

        if kind is PropertyKind.REFERENCE:
            ref_id = prop["$ref"]
            ref_schema = _resolve(ref_id, schemas_map, f"{schema.id}.{name}.$ref", stack)
            _append_unique(reference_ids, [ref_id])
            _append_unique(reference_ids, get_reference_ids(ref_schema, schemas_map, stack))

        elif kind is PropertyKind.OBJECT:
            nested = Schema(prop.get("properties") or {}, f"{schema.id}.{name}.properties")
            _append_unique(reference_ids, get_reference_ids(nested, schemas_map, stack))

        elif kind is PropertyKind.ARRAY:
            items = prop.get("items") or {}

            if "$ref" in items:
                item_ref_id = items["$ref"]
                item_schema = _resolve(
                    item_ref_id, schemas_map, f"{schema.id}.{name}.items.$ref", stack
                )
                _append_unique(reference_ids, [item_ref_id])
                _append_unique(reference_ids, get_reference_ids(item_schema, schemas_map, stack))

            elif items.get("properties") is not None:
                item_schema = Schema(items["properties"], f"{schema.id}.{name}.items.properties")
                _append_unique(reference_ids, get_reference_ids(item_schema, schemas_map, stack))

    if not _stack:
        log.debug("references_resolved", schema_id=schema.id, reference_ids=reference_ids)

    return reference_ids
