"""Shared schema validation utilities.

Bundle metadata is validated with JSON Schema. Schemas are stored as YAML
files under ``config_composer/data/schemas/`` and loaded in one consistent
way.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from config_composer.core.exceptions import ValidationError
from config_composer.data import get_data_path, read_yaml

BUNDLE_METADATA_SCHEMA = "bundle-metadata.schema.yaml"


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by file name.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    if not schema_name.lower().endswith((".yaml", ".yml")):
        schema_name = f"{schema_name}.yaml"

    path = get_data_path("schemas", schema_name)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name} (searched {path.parent})")

    schema = read_yaml("schemas", schema_name)
    if not schema:
        raise ValueError(f"Schema must be a non-empty YAML mapping: {schema_name}")
    return schema


def schema_errors(payload: Any, schema_name: str) -> List[str]:
    """Validate ``payload`` and return readable error messages (empty if valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Any, schema_name: str, *, label: str = "payload") -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        ValidationError: listing every schema violation.
    """
    errors = schema_errors(payload, schema_name)
    if errors:
        raise ValidationError(
            f"Invalid {label}: " + "; ".join(errors),
            errors=errors,
            context={"schema": schema_name},
        )


def validate_bundle_metadata(metadata: Any) -> None:
    """Validate the metadata record of one configuration bundle."""
    label = "bundle metadata"
    if isinstance(metadata, dict) and isinstance(metadata.get("name"), str):
        label = f"metadata for bundle '{metadata['name']}'"
    validate_payload(metadata, BUNDLE_METADATA_SCHEMA, label=label)


__all__ = [
    "BUNDLE_METADATA_SCHEMA",
    "load_schema",
    "schema_errors",
    "validate_payload",
    "validate_bundle_metadata",
]
