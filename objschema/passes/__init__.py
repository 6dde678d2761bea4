"""Passes — Pipeline stages for object validation."""

from objschema.passes.p00_cleanup_nulls import cleanup_nulls, strip_nulls
from objschema.passes.p10_cleanup_attributes import cleanup_attributes, drop_attributes
from objschema.passes.p20_normalize_attributes import (
    coerce_attributes,
    normalize_attributes,
    normalize_type,
)
from objschema.passes.p30_check_constraints import check_constraints
from objschema.passes.p40_nullify_empty_values import nullify_empty, nullify_empty_values
from objschema.passes.walker import map_object_properties

__all__ = [
    "strip_nulls",
    "drop_attributes",
    "coerce_attributes",
    "check_constraints",
    "nullify_empty",
    # Helpers usable without a context
    "cleanup_nulls",
    "cleanup_attributes",
    "normalize_attributes",
    "normalize_type",
    "nullify_empty_values",
    "map_object_properties",
]
