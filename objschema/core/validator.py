"""
Validator — Schema registry and validation pipeline orchestration.

The validator owns the schema registry, runs passes in order and turns
remaining violations into a ValidationError.

The validator is NOT where cleanup or coercion rules live; see passes/.
"""

from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from objschema.core.constraints import ConstraintEngine
from objschema.core.context import ValidationContext
from objschema.core.errors import (
    DuplicateSchemaIdError,
    NoSchemasProvidedError,
    SchemaNotFoundError,
    SchemaSetError,
    ValidationError,
)
from objschema.core.logging import LogChannel, get_logger
from objschema.passes import (
    check_constraints,
    coerce_attributes,
    drop_attributes,
    nullify_empty,
    strip_nulls,
)
from objschema.schema.references import get_reference_ids
from objschema.schema.schema import Schema

# Type alias for a pass function
PassFn = Callable[[ValidationContext], ValidationContext]

# Run inside a failure boundary; the constraint check reports what they trip on
PREPARATION_PASSES: tuple[PassFn, ...] = (drop_attributes, coerce_attributes)

log = get_logger(LogChannel.VALIDATION)


class Validator:
    """
    Validates and normalizes objects against a set of schemas.

    Args:
        schemas: Schemas to register; ids must be unique and every `$ref`
            must point at a schema of the set

    Raises:
        NoSchemasProvidedError: `schemas` is None or empty
        DuplicateSchemaIdError: two schemas share an id
        SchemaSetError: a schema is structurally invalid or references an
            unknown schema
        CyclicSchemaReferenceError: schema references form a cycle
    """

    def __init__(self, schemas: Optional[Iterable[Schema]]) -> None:
        schemas = list(schemas) if schemas is not None else []
        if not schemas:
            raise NoSchemasProvidedError()

        schemas_map: dict[str, Schema] = {}
        for schema in schemas:
            if schema.id in schemas_map:
                raise DuplicateSchemaIdError(schema.id)
            schemas_map[schema.id] = schema

        json_schemas_map = {schema.id: schema.json_schema for schema in schemas}

        errors = self._check_schemas(schemas_map, json_schemas_map)
        if errors:
            raise SchemaSetError(errors)

        self._schemas_map = MappingProxyType(schemas_map)
        self._json_schemas_map = MappingProxyType(json_schemas_map)
        self._engine = ConstraintEngine(json_schemas_map)

        log.verbose("validator_created", schema_ids=list(schemas_map))

    @staticmethod
    def _check_schemas(
        schemas_map: Mapping[str, Schema],
        json_schemas_map: Mapping[str, Mapping[str, Any]],
    ) -> list[dict[str, Any]]:
        errors: list[dict[str, Any]] = []

        for json_schema in json_schemas_map.values():
            errors.extend(ConstraintEngine.check_schema(json_schema))

        for schema in schemas_map.values():
            try:
                get_reference_ids(schema, schemas_map)
            except SchemaNotFoundError as error:
                errors.append({
                    "schemaId": schema.id,
                    "path": error.referenced_by,
                    "message": str(error),
                })

        return errors

    @property
    def schemas_map(self) -> Mapping[str, Schema]:
        """Read-only map of schema id -> Schema."""
        return self._schemas_map

    @property
    def json_schemas_map(self) -> Mapping[str, Mapping[str, Any]]:
        """Read-only map of schema id -> constraint-engine schema."""
        return self._json_schemas_map

    def _create_context(self, obj: Any, schema_id: str, **options: Any) -> ValidationContext:
        if schema_id not in self._json_schemas_map:
            raise SchemaNotFoundError(schema_id)

        return ValidationContext.from_input(
            obj,
            schema_id,
            self._json_schemas_map,
            engine=self._engine,
            **options,
        )

    def _prepare(self, ctx: ValidationContext) -> ValidationContext:
        for pass_fn in PREPARATION_PASSES:
            pass_name = pass_fn.__name__
            try:
                ctx = pass_fn(ctx)
            except Exception as error:
                log.verbose(
                    "preparation_failed",
                    schema_id=ctx.schema_id,
                    pass_name=pass_name,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                ctx.record_preparation_error(pass_name, error)
                break
        return ctx

    def validate(
        self,
        obj: Any,
        schema_id: str,
        should_nullify_empty_values: bool = False,
        should_cleanup_nulls: bool = False,
    ) -> Any:
        """
        Validate, clean and normalize a copy of `obj`.

        Args:
            obj: Input object; never mutated
            schema_id: Registered schema to validate against
            should_nullify_empty_values: Turn empty strings failing only
                pattern/enum/format checks on non-required properties
                into None instead of failing
            should_cleanup_nulls: Drop None-valued keys before validation

        Returns:
            The cleaned, normalized (and possibly nullified) copy

        Raises:
            SchemaNotFoundError: `schema_id` is not registered
            ValidationError: violations remain
        """
        ctx = self._create_context(
            obj,
            schema_id,
            should_nullify_empty_values=should_nullify_empty_values,
            should_cleanup_nulls=should_cleanup_nulls,
        )

        if ctx.should_cleanup_nulls:
            ctx = strip_nulls(ctx)

        ctx = self._prepare(ctx)
        ctx = check_constraints(ctx)

        if ctx.is_valid:
            return ctx.object

        if ctx.should_nullify_empty_values:
            ctx = nullify_empty(ctx)

            if ctx.is_valid:
                return ctx.object

        log.verbose(
            "validation_failed",
            schema_id=schema_id,
            codes=[violation.code for violation in ctx.violations],
            trace=ctx.trace,
        )

        raise ValidationError(schema_id, ctx.object, ctx.violations, ctx.preparation_error)

    def normalize(self, obj: Any, schema_id: str) -> Any:
        """
        Apply defaults and type coercion to a copy of `obj`.

        No cleanup and no constraint check.

        Raises:
            SchemaNotFoundError: `schema_id` is not registered
        """
        ctx = self._create_context(obj, schema_id)
        ctx = coerce_attributes(ctx)
        return ctx.object

    def get_reference_ids(self, schema_id: str) -> list[str]:
        """Ids of all schemas referenced by `schema_id`, transitively."""
        schema = self._schemas_map.get(schema_id)
        if schema is None:
            raise SchemaNotFoundError(schema_id)

        return get_reference_ids(schema, self._schemas_map)
