from __future__ import annotations

import pytest

from config_composer.core.exceptions import ValidationError
from config_composer.core.schemas import (
    load_schema,
    schema_errors,
    validate_bundle_metadata,
)


def test_bundle_metadata_schema_loads() -> None:
    schema = load_schema("bundle-metadata.schema")
    assert schema["required"] == ["name"]


def test_missing_schema_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_schema("does-not-exist")


def test_valid_metadata_passes() -> None:
    validate_bundle_metadata(
        {
            "name": "nextjs-15",
            "version": "15.0.0",
            "sections": [{"title": "Testing", "priority": 5, "mergeable": False}],
            "custom": {"anything": True},
        }
    )


def test_errors_carry_field_paths() -> None:
    errors = schema_errors(
        {"name": "x", "sections": [{"title": "A", "priority": "high"}]},
        "bundle-metadata.schema",
    )
    assert errors == ["sections.0.priority: 'high' is not of type 'integer'"]


@pytest.mark.parametrize(
    "metadata",
    [
        {},
        {"name": ""},
        {"name": "   "},
        {"name": 3},
        {"name": "x", "sections": [{"priority": 1}]},
        {"name": "x", "sections": "Testing"},
        ["name"],
    ],
)
def test_invalid_metadata_raises(metadata) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_bundle_metadata(metadata)
    assert exc.value.errors


def test_error_message_names_the_bundle() -> None:
    with pytest.raises(ValidationError, match="metadata for bundle 'react'"):
        validate_bundle_metadata({"name": "react", "priority": "high"})
