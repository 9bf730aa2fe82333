"""JSON Schema validation for composer inputs."""
from __future__ import annotations

from .validation import (
    BUNDLE_METADATA_SCHEMA,
    load_schema,
    schema_errors,
    validate_bundle_metadata,
    validate_payload,
)

__all__ = [
    "BUNDLE_METADATA_SCHEMA",
    "load_schema",
    "schema_errors",
    "validate_payload",
    "validate_bundle_metadata",
]
