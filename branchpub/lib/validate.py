"""
Schema validation for branchpub.

Validates option mappings against the JSON Schemas shipped in
branchpub/schemas before they are turned into config objects.
"""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

from branchpub.lib.errors import ConfigurationError


def _get_schemas_dir() -> Path:
    """Get path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")
    return json.loads(schema_path.read_text())


def validate(data: dict, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Dictionary to validate
        schema_name: Schema name (e.g., "publish")

    Raises:
        ConfigurationError: If validation fails. The option is the
            offending key, or "(root)" for problems with the mapping itself.
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        if e.absolute_path:
            option = ".".join(str(p) for p in e.absolute_path)
        else:
            option = "(root)"
        raise ConfigurationError(option, f"Invalid option {option}: {e.message}") from None
