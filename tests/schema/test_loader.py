"""
Tests for loading schemas from YAML files.
"""

import pytest

from objschema import DuplicateSchemaIdError, Schema, Validator
from objschema.schema.loader import (
    create_schemas_map,
    list_schema_files,
    load_schema,
    load_schemas,
)


class TestLoadSchema:
    """Tests for single file loading."""

    def test_id_from_file_name(self, schemas_dir):
        schema = load_schema(schemas_dir / "Profile.yaml")
        assert schema.id == "Profile"
        assert schema.source["contactDetails"]["type"] == "object"

    def test_enum_file(self, schemas_dir):
        schema = load_schema(schemas_dir / "shared" / "Status.yaml")
        assert schema.is_enum
        assert schema.json_schema["enum"] == ["ACTIVE", "PENDING"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_schema(tmp_path / "Missing.yaml")

    def test_non_mapping_file(self, tmp_path):
        """Verify a YAML list is rejected."""
        path = tmp_path / "Broken.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_schema(path)


class TestLoadSchemas:
    """Tests for directory loading."""

    def test_lists_yaml_files_recursively(self, schemas_dir):
        names = [path.name for path in list_schema_files(schemas_dir)]
        assert sorted(names) == ["FavoriteItem.yaml", "Preferences.yml", "Profile.yaml", "Status.yaml"]

    def test_loads_every_schema(self, schemas_dir):
        ids = {schema.id for schema in load_schemas(schemas_dir)}
        assert ids == {"Profile", "FavoriteItem", "Preferences", "Status"}

    def test_duplicate_file_names(self, tmp_path):
        """Verify same-named files in different folders collide."""
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        (tmp_path / "a" / "Status.yaml").write_text("enum: [A]\n")
        (tmp_path / "b" / "Status.yml").write_text("enum: [B]\n")

        with pytest.raises(DuplicateSchemaIdError, match="Multiple schemas provided for ID: Status"):
            load_schemas(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_schemas(tmp_path / "nope")

    def test_loaded_schemas_build_a_validator(self, schemas_dir):
        validator = Validator(load_schemas(schemas_dir))
        assert set(validator.schemas_map) == {"Profile", "FavoriteItem", "Preferences", "Status"}


class TestCreateSchemasMap:
    """Tests for create_schemas_map."""

    def test_map_by_id(self, schemas_dir):
        schemas_map = create_schemas_map(schemas_dir)
        assert schemas_map["Profile"].id == "Profile"

    def test_extra_schemas_override(self, schemas_dir):
        """Verify extra Schema instances win and other values are ignored."""
        status = Schema({"enum": ["ON", "OFF"]}, "Status")
        extra = Schema({"name": {}}, "Extra")

        schemas_map = create_schemas_map(schemas_dir, [status, extra, "not a schema", None])

        assert schemas_map["Status"] is status
        assert schemas_map["Extra"] is extra
        assert len(schemas_map) == 5
