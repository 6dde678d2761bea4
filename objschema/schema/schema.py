"""
Schema — A named, normalized description of an object's or enum's shape.

Schemas are immutable once built: `source` hands out deep copies and every
algebra operation (clone, pure, only, extend, wrap) returns a new Schema.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Mapping, Optional, Union

from objschema.core.errors import UnsupportedSchemaOperationError
from objschema.schema.properties import (
    is_enum_source,
    normalize_required,
    normalize_source,
    remove_required_and_default,
)

UNDEFINED_SCHEMA_ID = "UNDEFINED_SCHEMA_ID"


class Schema:
    """
    Schema for defining and manipulating object shapes.

    Args:
        source: A properties bag, an enum declaration (`{"enum": [...]}`)
            or another Schema whose source is reused
        id: Schema identifier, unique within a Validator
    """

    def __init__(self, source: Union["Schema", Mapping[str, Any]], id: Optional[str] = None) -> None:
        self._id = id or UNDEFINED_SCHEMA_ID

        if isinstance(source, Schema):
            source = source.source

        self._source = normalize_source(source)

    def __repr__(self) -> str:
        kind = "enum" if self.is_enum else "object"
        return f"<Schema {self._id!r} ({kind})>"

    @property
    def id(self) -> str:
        return self._id

    @property
    def source(self) -> dict[str, Any]:
        """Deep copy of the normalized properties bag or enum declaration."""
        return copy.deepcopy(self._source)

    @property
    def is_enum(self) -> bool:
        return is_enum_source(self._source)

    @property
    def json_schema(self) -> dict[str, Any]:
        """
        Constraint-engine representation.

        `{id, enum, type}` for enums, otherwise
        `{id, type: 'object', properties, required?}` with `x-required`
        markers on required properties.
        """
        if self.is_enum:
            return {"id": self._id, **self.source}

        return normalize_required({
            "id": self._id,
            "type": "object",
            "properties": self.source,
        })

    def _ensure_object(self, operation: str) -> None:
        if self.is_enum:
            raise UnsupportedSchemaOperationError(operation)

    # =========================================================================
    # Schema algebra
    # =========================================================================

    def clone(self, id: Optional[str] = None) -> "Schema":
        """Same properties, new identifier."""
        return Schema(self.source, id)

    def pure(self, id: Optional[str] = None) -> "Schema":
        """Clone without `required` flags and `default` values at any depth."""
        self._ensure_object("pure")
        return Schema(remove_required_and_default(self.source), id)

    def only(self, property_names: Iterable[str], id: Optional[str] = None) -> "Schema":
        """Clone keeping only the named top-level properties."""
        self._ensure_object("only")
        source = self.source
        picked = {name: source[name] for name in property_names if name in source}
        return Schema(picked, id)

    def extend(self, properties: Mapping[str, Any], id: Optional[str] = None) -> "Schema":
        """Clone with `properties` merged over the existing ones."""
        self._ensure_object("extend")
        return Schema({**self.source, **copy.deepcopy(dict(properties))}, id)

    def wrap(
        self,
        property_name: str,
        options: Optional[Mapping[str, Any]] = None,
        id: Optional[str] = None,
    ) -> "Schema":
        """
        Nest this schema's properties under a single object property.

        `options` are merged into the wrapping property and default to
        `{"required": True}`.
        """
        self._ensure_object("wrap")

        if options is None:
            options = {"required": True}

        source = {
            property_name: {
                "type": "object",
                "properties": self.source,
                **options,
            }
        }
        return Schema(source, id)
