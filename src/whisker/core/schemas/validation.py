"""Shared schema validation utilities.

Whisker validates configuration and serialized node trees using JSON Schema.
Schemas are stored as YAML files under ``whisker.data/schemas/`` and loaded
in a single, consistent way across the codebase.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

import jsonschema

from whisker.core.exceptions import SchemaValidationError
from whisker.core.utils.layered_yaml import read_yaml_file
from whisker.data import get_data_path


@lru_cache(maxsize=16)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.schema.yaml`` if no extension is present.

    Args:
        schema_name: Schema file name under the schemas root
            (e.g., "config" or "template.schema.yaml").

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.schema.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml_file(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    schema = load_schema(schema_name)

    try:
        jsonschema.validate(instance=payload, schema=schema)
    except jsonschema.ValidationError as exc:
        path = ".".join(str(p) for p in exc.absolute_path)
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {exc.message}",
            context={"schema": schema_name, "path": path},
        ) from exc


__all__ = ["load_schema", "validate_payload"]
