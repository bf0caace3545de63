"""JSON Schema validation for coordinate manifests.

This module loads the bundled JSON Schema and validates coordinate maps
before they are handed to consumers.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import CoordinateMetadata

# Path to the schema file shipped inside the package
# src/sprite_sheet_packer/core/validator.py -> src/sprite_sheet_packer/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "coordinate_map.schema.json"


def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_manifest(manifest: CoordinateMetadata) -> None:
    """Validate a coordinate map against the JSON Schema.

    Args:
        manifest: The coordinate map to validate

    Raises:
        ValidationError: If the map doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    schema = load_schema()
    jsonschema.validate(instance=manifest, schema=schema)


def validate_manifest_with_error_details(
    manifest: CoordinateMetadata,
) -> tuple[bool, str | None]:
    """Validate a coordinate map and return detailed error information.

    Args:
        manifest: The coordinate map to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_manifest(manifest)
        return True, None
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        error_msg = f"Validation error at {error_path}: {e.message}"

        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
