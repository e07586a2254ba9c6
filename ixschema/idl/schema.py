"""JSON Schema for the packaged IDL format.

This is the structural definition of an IDL document as client tooling
persists it: program name, optional version and the ordered instruction
list. It is the first gate when loading a document; anything that fails
here is rejected before descriptors are built.
"""

from ixschema.idl import IDL_FORMAT_VERSION
from ixschema.idl.models import ArgType

_DOCS = {
    "type": "array",
    "items": {"type": "string"},
}

_ACCOUNT = {
    "type": "object",
    "required": ["name", "isMut", "isSigner"],
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "isMut": {"type": "boolean"},
        "isSigner": {"type": "boolean"},
        "docs": _DOCS,
    },
}

_ARG = {
    "type": "object",
    "required": ["name", "type"],
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "type": {
            "type": "string",
            "enum": [t.value for t in ArgType],
            "description": "Primitive type tag; fixed-width little-endian on the wire.",
        },
    },
}

# Tools can export this and use it with any JSON Schema validator.
IDL_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": f"https://ixschema.dev/schema/idl/v{IDL_FORMAT_VERSION}",
    "title": "Program IDL",
    "description": "Instruction shapes of an on-chain program: account roles and typed arguments.",
    "type": "object",
    "required": ["name", "instructions"],
    "properties": {
        "version": {
            "type": "string",
            "pattern": r"^\d+\.\d+\.\d+",
        },
        "name": {
            "type": "string",
            "pattern": "^[A-Za-z_][A-Za-z0-9_]*$",
        },
        "instructions": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "accounts", "args"],
                "additionalProperties": False,
                "properties": {
                    "name": {
                        "type": "string",
                        "pattern": "^[A-Za-z_][A-Za-z0-9_]*$",
                    },
                    "docs": _DOCS,
                    "accounts": {"type": "array", "items": _ACCOUNT},
                    "args": {"type": "array", "items": _ARG},
                },
            },
        },
    },
}


def get_schema() -> dict:
    """Return the IDL JSON Schema."""
    return IDL_SCHEMA
