"""
Schema Loader — Load schema declarations from YAML files.

A schema file holds either a properties bag or an enum declaration; the
schema id is the file name without its extension:

    schemas/
      Profile.yaml     -> Schema(..., "Profile")
      shared/
        Status.yaml    -> Schema(..., "Status")
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

import yaml

from objschema.core.errors import DuplicateSchemaIdError
from objschema.core.logging import LogChannel, get_logger
from objschema.schema.schema import Schema

SCHEMA_SUFFIXES = (".yaml", ".yml")

log = get_logger(LogChannel.LOADER)


def load_schema(path: Union[str, Path]) -> Schema:
    """
    Load a single schema file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with open(path) as f:
        source = yaml.safe_load(f)

    if not isinstance(source, dict):
        raise ValueError(f"Schema file must contain a mapping: {path}")

    schema = Schema(source, path.stem)
    log.verbose("schema_loaded", schema_id=schema.id, path=str(path))
    return schema


def list_schema_files(directory: Union[str, Path]) -> list[Path]:
    """All YAML files under `directory`, recursively, in a stable order."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Schemas directory not found: {directory}")

    return sorted(
        path for path in directory.rglob("*")
        if path.is_file() and path.suffix in SCHEMA_SUFFIXES
    )


def load_schemas(directory: Union[str, Path]) -> list[Schema]:
    """
    Load every schema file found under `directory`.

    Raises:
        DuplicateSchemaIdError: If two files share a name
    """
    schemas = []
    seen: set[str] = set()

    for path in list_schema_files(directory):
        schema = load_schema(path)
        if schema.id in seen:
            raise DuplicateSchemaIdError(schema.id)
        seen.add(schema.id)
        schemas.append(schema)

    log.info("schemas_loaded", directory=str(directory), count=len(schemas))
    return schemas


def create_schemas_map(
    directory: Union[str, Path],
    extra_schemas: Iterable[object] = (),
) -> dict[str, Schema]:
    """
    Build an id -> Schema map from a directory of YAML files.

    Schema instances in `extra_schemas` override file-loaded schemas with
    the same id; anything that isn't a Schema is ignored, so a module's
    public names can be passed as-is.
    """
    schemas_map = {schema.id: schema for schema in load_schemas(directory)}

    for schema in extra_schemas:
        if isinstance(schema, Schema):
            schemas_map[schema.id] = schema

    return schemas_map
