"""
Pass 30 — Constraint Check

Runs the constraint engine against the prepared object and stores the
violations on the context.
"""

from objschema.core.context import ValidationContext
from objschema.core.logging import get_pass_logger

PASS_NAME = "p30_check_constraints"
log = get_pass_logger(PASS_NAME)


def check_constraints(ctx: ValidationContext) -> ValidationContext:
    """Populate ctx.violations (empty when the object is valid)."""
    if ctx.engine is None:
        raise ValueError("ValidationContext has no constraint engine")

    ctx.violations = ctx.engine.validate(ctx.object, ctx.schema_id)

    log.verbose(
        "constraints_checked",
        schema_id=ctx.schema_id,
        violations=len(ctx.violations),
        prepared=ctx.is_prepared,
    )

    ctx.add_trace(PASS_NAME)
    return ctx
