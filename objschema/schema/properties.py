"""
Property Normalization — Transforms over raw property declarations.

All functions here return new structures; inputs are never mutated.

- property_kind(): the single discriminator for property descriptors
- normalize_source(): type inference and default object/array shapes
- normalize_required(): promote per-property `required` flags to the
  schema-level `required` list plus an `x-required` marker
- remove_required_and_default(): deep-strip `required` and `default`
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from objschema.schema.enums import PropertyKind, PropertyType

PropertiesBag = dict[str, dict[str, Any]]

REQUIRED_MARKER = "x-required"


def property_kind(descriptor: Mapping[str, Any]) -> PropertyKind:
    """Classify a property descriptor."""
    if "$ref" in descriptor:
        return PropertyKind.REFERENCE
    if "enum" in descriptor:
        return PropertyKind.ENUM

    declared = descriptor.get("type")
    if declared == PropertyType.OBJECT.value:
        return PropertyKind.OBJECT
    if declared == PropertyType.ARRAY.value:
        return PropertyKind.ARRAY
    return PropertyKind.SCALAR


def is_enum_source(source: Mapping[str, Any]) -> bool:
    """Enum schema sources carry a top-level `enum` list instead of properties."""
    return isinstance(source.get("enum"), list)


# ============================================================================
# Type inference
# ============================================================================

def _infer_type(descriptor: Mapping[str, Any]) -> str:
    if descriptor.get("properties") is not None:
        return PropertyType.OBJECT.value
    if descriptor.get("items") is not None:
        return PropertyType.ARRAY.value
    return PropertyType.STRING.value


def normalize_property(descriptor: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize one property descriptor.

    References are returned as-is. Array items are normalized one level
    deep only: an array whose items are themselves arrays keeps the inner
    items untouched.
    """
    prop = dict(descriptor)

    if "$ref" in prop:
        return prop

    if not prop.get("type"):
        prop["type"] = _infer_type(prop)

    if prop["type"] == PropertyType.OBJECT.value:
        prop["properties"] = normalize_properties(prop.get("properties") or {})

    elif prop["type"] == PropertyType.ARRAY.value:
        items = prop.get("items")

        if not items:
            prop["items"] = {"type": PropertyType.STRING.value}

        elif items.get("properties") is not None:
            prop["items"] = {
                **items,
                "type": PropertyType.OBJECT.value,
                "properties": normalize_properties(items["properties"]),
            }

    return prop


def normalize_properties(properties: Mapping[str, Any]) -> PropertiesBag:
    """Normalize every descriptor of a properties bag."""
    return {name: normalize_property(descriptor) for name, descriptor in properties.items()}


def normalize_source(source: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize a schema source: either a properties bag or an enum declaration.

    The returned structure shares nothing with `source`.
    """
    source = copy.deepcopy(dict(source))

    if is_enum_source(source):
        source["type"] = source.get("type") or PropertyType.STRING.value
        return source

    return normalize_properties(source)


# ============================================================================
# Required / default handling
# ============================================================================

def normalize_required(json_schema: Mapping[str, Any]) -> dict[str, Any]:
    """
    Promote boolean `required` flags into the schema-level `required` list.

    Each required property keeps an `x-required: true` marker. The boolean
    flag is removed whatever its value; a `required` list left by a previous
    run is preserved, so running this twice changes nothing.
    """
    result = dict(json_schema)

    if is_enum_source(result):
        return result

    properties = result.get("properties")
    if properties is None:
        return result

    required = []
    normalized = {}

    for name, descriptor in properties.items():
        prop = dict(descriptor)

        flag = prop.get("required")
        if isinstance(flag, bool):
            del prop["required"]
            if flag:
                prop[REQUIRED_MARKER] = True
                required.append(name)

        kind = property_kind(prop)

        if kind is PropertyKind.OBJECT:
            prop = normalize_required(prop)

        elif kind is PropertyKind.ARRAY and prop.get("items"):
            prop["items"] = normalize_required(prop["items"])

        normalized[name] = prop

    result["properties"] = normalized

    if required:
        result["required"] = required

    return result


def remove_required_and_default(properties: Mapping[str, Any]) -> PropertiesBag:
    """Strip `required` and `default` from every property, recursively."""
    stripped = {}

    for name, descriptor in properties.items():
        prop = {
            key: value
            for key, value in descriptor.items()
            if key not in ("required", "default")
        }

        kind = property_kind(prop)

        if kind is PropertyKind.OBJECT and prop.get("properties") is not None:
            prop["properties"] = remove_required_and_default(prop["properties"])

        elif kind is PropertyKind.ARRAY:
            items = prop.get("items") or {}
            if items.get("properties") is not None:
                prop["items"] = {
                    **items,
                    "properties": remove_required_and_default(items["properties"]),
                }

        stripped[name] = prop

    return stripped
