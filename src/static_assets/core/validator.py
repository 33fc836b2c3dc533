"""JSON Schema validation for manifests, metadata and configuration.

This module loads the formal JSON Schemas shipped with the package and
validates documents before they are used or written.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import Manifest

# Schemas live next to this module
SCHEMA_DIR = Path(__file__).parent / "schemas"

MANIFEST_SCHEMA = "manifest.schema.json"
METADATA_SCHEMA = "metadata.schema.json"
CONFIG_SCHEMA = "config.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str = MANIFEST_SCHEMA) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        name: Schema filename within SCHEMA_DIR

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_manifest(manifest: Manifest) -> None:
    """Validate a manifest against the JSON Schema.

    Args:
        manifest: The manifest dictionary to validate

    Raises:
        ValidationError: If the manifest doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    jsonschema.validate(instance=manifest, schema=load_schema(MANIFEST_SCHEMA))


def validate_metadata(document: Any) -> None:
    """Validate a brand metadata document (meta.json).

    Raises:
        ValidationError: If the document doesn't conform to the schema
    """
    jsonschema.validate(instance=document, schema=load_schema(METADATA_SCHEMA))


def validate_config(config: Any) -> None:
    """Validate a generation configuration document (assets.config.json).

    Raises:
        ValidationError: If the configuration doesn't conform to the schema
    """
    jsonschema.validate(instance=config, schema=load_schema(CONFIG_SCHEMA))


def describe_validation_error(error: ValidationError) -> str:
    """Build a user-friendly message for a schema validation error."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    error_msg = f"Validation error at {error_path}: {error.message}"

    # Add context if available
    if error.instance:
        error_msg += f"\nInvalid value: {error.instance}"

    return error_msg


def validate_manifest_with_error_details(manifest: Manifest) -> tuple[bool, str | None]:
    """Validate a manifest and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Args:
        manifest: The manifest dictionary to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_manifest(manifest)
        return True, None
    except ValidationError as e:
        return False, describe_validation_error(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
