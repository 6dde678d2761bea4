"""
Pass 40 — Empty Value Nullification

Turns empty strings that failed a format constraint into None.

A violation is cleared when all of the following hold:
- its code is PATTERN, ENUM_MISMATCH or INVALID_FORMAT
- the failing property is not marked x-required
- the offending value is an empty string

Every other violation is kept.
"""

import copy
from typing import Any, Iterable, Sequence

from objschema.core.constraints import ConstraintViolation
from objschema.core.context import ValidationContext
from objschema.core.logging import get_pass_logger
from objschema.schema.enums import FORMAT_ERROR_CODES
from objschema.schema.properties import REQUIRED_MARKER

PASS_NAME = "p40_nullify_empty_values"
log = get_pass_logger(PASS_NAME)

EMPTY_VALUES = ("",)


def _is_empty(value: Any) -> bool:
    return isinstance(value, str) and value in EMPTY_VALUES


def _set_path(target: Any, path: Sequence[Any], value: Any) -> None:
    *parents, last = path
    for part in parents:
        target = target[part]
    target[last] = value


def nullify_empty_values(
    obj: Any,
    violations: Iterable[ConstraintViolation],
) -> tuple[Any, list[ConstraintViolation]]:
    """
    Nullify empty values behind format violations.

    Returns:
        (copy of obj with nullified paths, violations that remain)
    """
    result = copy.deepcopy(obj)
    remaining: list[ConstraintViolation] = []

    for violation in violations:
        is_required = violation.schema.get(REQUIRED_MARKER) is True
        is_format_error = violation.code in FORMAT_ERROR_CODES

        if is_required or not is_format_error:
            remaining.append(violation)
            continue

        if not violation.path_parts or not _is_empty(violation.value):
            remaining.append(violation)
            continue

        _set_path(result, violation.path_parts, None)

    return result, remaining


def nullify_empty(ctx: ValidationContext) -> ValidationContext:
    """Replace ctx.object and ctx.violations with their nullified versions."""
    before = len(ctx.violations)
    ctx.object, ctx.violations = nullify_empty_values(ctx.object, ctx.violations)

    log.verbose(
        "empty_values_nullified",
        schema_id=ctx.schema_id,
        nullified=before - len(ctx.violations),
        remaining=len(ctx.violations),
    )

    ctx.add_trace(PASS_NAME)
    return ctx
