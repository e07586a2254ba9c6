"""Schema validator — structural validation of IDL documents.

Gate 1 of loading. Walks the parsed document against ``IDL_SCHEMA`` and
collects every problem with a JSONPath-like location. Account, argument
and instruction entries are closed: an unknown key such as a misspelled
``isMutable`` is reported rather than silently dropped.
"""

from __future__ import annotations

import re

from ixschema.idl.schema import get_schema


def validate_schema(data) -> list[str]:
    """Validate a parsed IDL document.

    Returns:
        List of error messages. Empty list means valid.
    """
    issues: list[str] = []
    _validate_node(data, get_schema(), "", issues)
    return issues


def _validate_node(data, schema: dict, path: str, issues: list[str]):
    schema_type = schema.get("type")
    where = path or "/"

    if schema_type and not _type_matches(data, schema_type):
        issues.append(f"{where}: expected type '{schema_type}', got {type(data).__name__}")
        return

    if "enum" in schema and data not in schema["enum"]:
        issues.append(f"{where}: value '{data}' not in allowed values {schema['enum']}")

    if schema_type == "string":
        min_len = schema.get("minLength", 0)
        if len(data) < min_len:
            issues.append(f"{where}: string too short (min {min_len}, got {len(data)})")
        if "pattern" in schema and not re.match(schema["pattern"], data):
            issues.append(f"{where}: string '{data}' does not match pattern '{schema['pattern']}'")

    if schema_type == "object":
        for req in schema.get("required", []):
            if req not in data:
                issues.append(f"{where}: missing required property '{req}'")

        props = schema.get("properties", {})
        closed = schema.get("additionalProperties", True) is False
        for key, value in data.items():
            if key in props:
                _validate_node(value, props[key], f"{path}.{key}", issues)
            elif closed:
                issues.append(f"{where}: unknown property '{key}'")

    if schema_type == "array":
        items_schema = schema.get("items")
        if items_schema:
            for i, item in enumerate(data):
                _validate_node(item, items_schema, f"{path}[{i}]", issues)


def _type_matches(data, schema_type: str) -> bool:
    type_map = {
        "string": str,
        "integer": int,
        "boolean": bool,
        "array": list,
        "object": dict,
    }
    expected = type_map.get(schema_type)
    if expected is None:
        return True
    if schema_type == "integer" and isinstance(data, bool):
        return False
    return isinstance(data, expected)
