"""
ValidationContext — Mutable state passed between pipeline passes.

Each pass reads prior results and mutates only the fields it owns.
The context also records how far preparation (cleanup + normalization)
got, so violations reported later can be traced to a partially
processed object.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from objschema.core.constraints import ConstraintEngine, ConstraintViolation


@dataclass
class ValidationContext:
    """
    Context for one validate/normalize call.

    `object` is a deep copy of the caller's input and is the only object
    the passes mutate.
    """

    schema_id: str
    json_schema: Mapping[str, Any]
    json_schemas_map: Mapping[str, Mapping[str, Any]]
    object: Any

    engine: Optional[ConstraintEngine] = None
    should_nullify_empty_values: bool = False
    should_cleanup_nulls: bool = False

    # Set by passes
    violations: list[ConstraintViolation] = field(default_factory=list)
    preparation_error: Optional[BaseException] = None
    failed_pass: Optional[str] = None
    trace: list[str] = field(default_factory=list)

    @classmethod
    def from_input(
        cls,
        obj: Any,
        schema_id: str,
        json_schemas_map: Mapping[str, Mapping[str, Any]],
        **options: Any,
    ) -> "ValidationContext":
        """Create a context holding an isolated copy of `obj`."""
        return cls(
            schema_id=schema_id,
            json_schema=json_schemas_map[schema_id],
            json_schemas_map=json_schemas_map,
            object=copy.deepcopy(obj),
            **options,
        )

    @property
    def is_prepared(self) -> bool:
        """True when cleanup and normalization ran to completion."""
        return self.preparation_error is None

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add_trace(self, pass_name: str) -> None:
        self.trace.append(pass_name)

    def record_preparation_error(self, pass_name: str, error: BaseException) -> None:
        self.preparation_error = error
        self.failed_pass = pass_name
