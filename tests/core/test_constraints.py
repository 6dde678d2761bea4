"""
Unit tests for the jsonschema adapter.
"""

import pytest

from objschema import SchemaNotFoundError
from objschema.core.constraints import ConstraintEngine, format_path, json_type


@pytest.fixture
def engine(schemas):
    return ConstraintEngine({schema.id: schema.json_schema for schema in schemas})


def _by_path(violations):
    return {violation.path: violation for violation in violations}


class TestHelpers:
    """Tests for path formatting and type naming."""

    def test_format_path(self):
        assert format_path([]) == "#/"
        assert format_path(["locations", 0, "name"]) == "#/locations/0/name"

    @pytest.mark.parametrize("value, expected", [
        (None, "null"),
        (True, "boolean"),
        (1, "integer"),
        (1.5, "number"),
        ("a", "string"),
        ([], "array"),
        ({}, "object"),
    ])
    def test_json_type(self, value, expected):
        assert json_type(value) == expected


class TestConstraintEngine:
    """Tests for ConstraintEngine.validate."""

    def test_valid(self, engine):
        obj = {"name": "Alice", "contactDetails": {"email": "alice@example.com"}}
        assert engine.validate(obj, "Profile") == []

    def test_missing_required(self, engine):
        violations = engine.validate({"contactDetails": {}}, "Profile")
        found = {(violation.path, violation.params) for violation in violations}

        assert found == {("#/", ("name",)), ("#/contactDetails", ("email",))}
        assert {violation.code for violation in violations} == {"OBJECT_MISSING_REQUIRED_PROPERTY"}

    def test_type_mismatch(self, engine):
        violation, = engine.validate({"age": "old"}, "Preferences")

        assert violation.code == "INVALID_TYPE"
        assert violation.path == "#/age"
        assert violation.params == ("number", "string")
        assert violation.path_parts == ("age",)
        assert violation.value == "old"

    def test_referenced_enum(self, engine):
        """Verify $ref by schema id resolves through the registry."""
        obj = {"name": "Alice", "contactDetails": {"email": "a@b.c"}, "status": "GONE"}

        violation, = engine.validate(obj, "Profile")

        assert violation.code == "ENUM_MISMATCH"
        assert violation.path == "#/status"
        assert violation.params == ("GONE",)

    def test_array_item_reference(self, engine):
        obj = {
            "name": "Alice",
            "contactDetails": {"email": "a@b.c"},
            "favoriteItems": [{"id": "1", "name": "Atlas"}, {"id": "2"}],
        }

        violation, = engine.validate(obj, "Profile")

        assert violation.path == "#/favoriteItems/1"
        assert violation.params == ("name",)

    def test_format_and_pattern(self, engine):
        obj = {
            "name": "Alice",
            "contactDetails": {"email": "nope", "mobileNumber": "+380"},
        }

        violations = _by_path(engine.validate(obj, "Profile"))

        assert violations["#/contactDetails/email"].code == "INVALID_FORMAT"
        assert violations["#/contactDetails/mobileNumber"].code == "PATTERN"

    def test_bounds(self, engine):
        violations = _by_path(engine.validate({"age": 200}, "Preferences"))
        assert violations["#/age"].code == "MAXIMUM"

    def test_x_required_visible_on_violation(self, engine):
        """Verify violations carry the failing sub-schema."""
        obj = {"name": "Alice", "contactDetails": {"email": ""}}

        violation, = engine.validate(obj, "Profile")

        assert violation.schema["x-required"] is True

    def test_ordered_by_path(self, engine):
        obj = {"name": "A", "gender": "X", "contactDetails": {"email": "x"}}
        paths = [violation.path for violation in engine.validate(obj, "Profile")]
        assert paths == sorted(paths)

    def test_unknown_schema(self, engine):
        with pytest.raises(SchemaNotFoundError):
            engine.validate({}, "Missing")


class TestFormats:
    """Tests for the custom format checks."""

    @pytest.fixture
    def link_engine(self):
        json_schema = {
            "id": "Link",
            "type": "object",
            "properties": {
                "url": {"type": "string", "format": "url"},
                "at": {"type": "string", "format": "date-time"},
            },
        }
        return ConstraintEngine({"Link": json_schema})

    @pytest.mark.parametrize("url", ["https://example.com", "http://example.com/a?b=1", "ftp://files.example.com"])
    def test_valid_url(self, link_engine, url):
        assert link_engine.validate({"url": url}, "Link") == []

    @pytest.mark.parametrize("url", ["example.com", "mailto:a@b.c", "https://", ""])
    def test_invalid_url(self, link_engine, url):
        violation, = link_engine.validate({"url": url}, "Link")
        assert violation.code == "INVALID_FORMAT"

    def test_date_time(self, link_engine):
        assert link_engine.validate({"at": "2024-05-01T10:00:00Z"}, "Link") == []
        violation, = link_engine.validate({"at": "yesterday"}, "Link")
        assert violation.code == "INVALID_FORMAT"


class TestCheckSchema:
    """Tests for meta-schema checks."""

    def test_valid_schema(self, profile_schema):
        assert ConstraintEngine.check_schema(profile_schema.json_schema) == []

    def test_invalid_type(self):
        errors = ConstraintEngine.check_schema({
            "id": "Bad",
            "type": "object",
            "properties": {"age": {"type": "float"}},
        })

        assert len(errors) == 1
        assert errors[0]["schemaId"] == "Bad"
        assert errors[0]["path"] == "#/properties/age/type"
