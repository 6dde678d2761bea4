"""
Pass 00 — Null Cleanup

Removes keys whose value is None, at any depth:
- through nested objects
- through objects inside arrays

None elements of arrays are kept; only object keys are removed.
"""

import copy
from typing import Any

from objschema.core.context import ValidationContext
from objschema.core.logging import get_pass_logger

PASS_NAME = "p00_cleanup_nulls"
log = get_pass_logger(PASS_NAME)


def _cleanup_nulls(target: Any) -> int:
    if isinstance(target, list):
        return sum(_cleanup_nulls(item) for item in target)

    if not isinstance(target, dict):
        return 0

    removed = 0
    for key in list(target):
        value = target[key]
        if value is None:
            del target[key]
            removed += 1
        else:
            removed += _cleanup_nulls(value)
    return removed


def cleanup_nulls(obj: Any) -> Any:
    """Return a deep copy of `obj` without None-valued object keys."""
    result = copy.deepcopy(obj)
    _cleanup_nulls(result)
    return result


def strip_nulls(ctx: ValidationContext) -> ValidationContext:
    """Remove None-valued keys from the context object in place."""
    removed = _cleanup_nulls(ctx.object)

    log.debug("nulls_removed", schema_id=ctx.schema_id, removed=removed)

    ctx.add_trace(PASS_NAME)
    return ctx
