"""
Shared fixtures: a small profile schema set mirroring tests/fixtures/schemas.
"""

from pathlib import Path

import pytest

from objschema import Schema, Validator

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def schemas_dir() -> Path:
    return FIXTURES_DIR / "schemas"


@pytest.fixture
def status_schema() -> Schema:
    return Schema({"enum": ["ACTIVE", "PENDING"]}, "Status")


@pytest.fixture
def preferences_schema() -> Schema:
    return Schema({
        "age": {"type": "number", "minimum": 0, "maximum": 199},
        "height": {"type": "number"},
        "isNotificationEnabled": {"type": "boolean"},
        "shouldSendEmails": {"type": "boolean"},
    }, "Preferences")


@pytest.fixture
def favorite_item_schema() -> Schema:
    return Schema({
        "id": {"required": True},
        "name": {"required": True},
        "description": {},
        "status": {"$ref": "Status", "default": "PENDING"},
        "categories": {
            "items": {"enum": ["Education", "Work", "Lifestyle", "Games"]},
        },
    }, "FavoriteItem")


@pytest.fixture
def profile_schema() -> Schema:
    return Schema({
        "name": {"required": True, "minLength": 3, "maxLength": 128},
        "status": {"$ref": "Status", "default": "PENDING"},
        "gender": {"enum": ["Male", "Female", "Other"], "default": "Other"},
        "contactDetails": {
            "required": True,
            "properties": {
                "email": {"type": "string", "format": "email", "required": True},
                "secondaryEmail": {"type": "string", "format": "email"},
                "mobileNumber": {
                    "type": "string",
                    "pattern": "^[0-9]{1,20}$",
                    "default": "380504112171",
                },
            },
        },
        "locations": {
            "items": {
                "properties": {
                    "name": {"required": True},
                    "address": {
                        "properties": {
                            "country": {"required": True, "default": "Ukraine"},
                            "city": {"required": True},
                            "zip": {"required": True},
                        },
                    },
                },
            },
        },
        "tags": {"type": "array"},
        "favoriteItems": {"items": {"$ref": "FavoriteItem"}},
        "preferences": {"$ref": "Preferences"},
    }, "Profile")


@pytest.fixture
def schemas(profile_schema, status_schema, preferences_schema, favorite_item_schema) -> list[Schema]:
    return [profile_schema, status_schema, preferences_schema, favorite_item_schema]


@pytest.fixture
def validator(schemas) -> Validator:
    return Validator(schemas)


@pytest.fixture
def profile_input() -> dict:
    """A valid-after-normalization profile with loose types and stray keys."""
    return {
        "name": "Oleksandr",
        "contactDetails": {"email": "oleksandr@example.com", "fax": "none"},
        "locations": [
            {
                "name": "Home",
                "address": {"city": "Kyiv", "zip": "01001", "floor": 3},
                "isPrimary": True,
            },
        ],
        "tags": ["founder"],
        "favoriteItems": [
            {"id": "1", "name": "Atlas", "categories": ["Education"], "rating": 5},
        ],
        "preferences": {
            "age": "30",
            "height": "180.5",
            "isNotificationEnabled": "yes",
            "shouldSendEmails": 0,
        },
        "createdAt": "2020-01-01",
    }
