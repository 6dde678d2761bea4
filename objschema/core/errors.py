"""
Errors — Exception taxonomy for schema construction, lookup and validation.

Construction errors surface immediately from Schema/Validator constructors,
lookup errors are raised per call, and ValidationError carries the
constraint violations of a failed validate() call.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field


class ObjectSchemaError(Exception):
    """Base class for all objschema errors."""


# ============================================================================
# Construction errors
# ============================================================================

class NoSchemasProvidedError(ObjectSchemaError, ValueError):
    """Validator constructed without schemas."""

    def __init__(self) -> None:
        super().__init__("No schemas provided")


class DuplicateSchemaIdError(ObjectSchemaError, ValueError):
    """Two schemas in one validator share an identifier."""

    def __init__(self, schema_id: str) -> None:
        super().__init__(f"Multiple schemas provided for ID: {schema_id}")
        self.schema_id = schema_id


class SchemaSetError(ObjectSchemaError, ValueError):
    """The schema set handed to a Validator is structurally invalid."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        errors_json = json.dumps(errors, indent=2, default=str)
        super().__init__(f"Schemas validation failed, errors: {errors_json}")
        self.errors = errors


class CyclicSchemaReferenceError(ObjectSchemaError, ValueError):
    """Schema references form a cycle."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Cyclic schema reference: {' -> '.join(self.chain)}")


class UnsupportedSchemaOperationError(ObjectSchemaError, TypeError):
    """Schema algebra operation called on an enum schema."""

    def __init__(self, operation: str) -> None:
        super().__init__(f'The "{operation}" method is not supported for enum schemas.')
        self.operation = operation


# ============================================================================
# Lookup errors
# ============================================================================

class SchemaNotFoundError(ObjectSchemaError, LookupError):
    """A schema id is absent from the registry."""

    def __init__(self, schema_id: str, referenced_by: Optional[str] = None) -> None:
        message = f'Schema "{schema_id}" not found'
        if referenced_by:
            message += f', referenced by "{referenced_by}"'
        super().__init__(message)
        self.schema_id = schema_id
        self.referenced_by = referenced_by


# ============================================================================
# Validation error
# ============================================================================

class ViolationDetail(BaseModel):
    """Serializable form of one constraint violation."""

    path: str = Field(..., description="JSON pointer-like path, e.g. '#/contactDetails/email'")
    code: str = Field(..., description="Violation code, e.g. ENUM_MISMATCH")
    params: list[str] = Field(default_factory=list, description="Code-specific parameters")
    message: str = Field(..., description="Human-readable message from the constraint engine")


class ValidationError(ObjectSchemaError):
    """
    Raised when an object fails validation against a schema.

    Holds the schema id, a snapshot of the object as it was checked
    (after cleanup, normalization and nullification) and the violations.
    """

    def __init__(
        self,
        schema_id: str,
        invalid_object: Any,
        violations: Iterable[Any],
        preparation_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(f'"{schema_id}" validation failed')
        self._schema_id = schema_id
        self._object = invalid_object
        self._validation_errors = tuple(
            ViolationDetail(
                path=violation.path,
                code=violation.code,
                params=list(violation.params),
                message=violation.message,
            )
            for violation in violations
        )
        self._preparation_error = preparation_error

    @property
    def schema_id(self) -> str:
        return self._schema_id

    @property
    def object(self) -> Any:
        return self._object

    @property
    def validation_errors(self) -> tuple[ViolationDetail, ...]:
        return self._validation_errors

    @property
    def preparation_error(self) -> Optional[BaseException]:
        """Exception raised while cleaning/normalizing the object, if any."""
        return self._preparation_error

    @property
    def codes(self) -> list[str]:
        return [error.code for error in self._validation_errors]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON serializable representation of the error."""
        return {
            "code": type(self).__name__,
            "object": self._object,
            "message": str(self),
            "schemaId": self._schema_id,
            "validationErrors": [error.model_dump() for error in self._validation_errors],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)
