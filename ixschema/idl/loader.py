"""Load IDL documents from disk or from already-parsed dicts.

Both entry points run the schema and semantic gates and only then build
immutable descriptors, so an ``IdlDocument`` returned from here always
satisfies the descriptor invariants.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from ixschema.errors import IdlLoadError
from ixschema.idl.models import (
    AccountRole,
    ArgDescriptor,
    ArgType,
    IdlDocument,
    InstructionDescriptor,
)
from ixschema.idl.schema_validator import validate_schema
from ixschema.idl.semantic_validator import validate_semantics

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}


def read_idl_data(path: str | Path):
    """Read an IDL file without validating it (JSON, or YAML for any other suffix)."""
    path = Path(path)
    source = str(path)

    if not path.exists():
        raise IdlLoadError(source, [f"File not found: {path}"])

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in JSON_SUFFIXES:
                return json.load(f)
            return yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise IdlLoadError(source, [f"Invalid JSON: {e}"]) from e
    except yaml.YAMLError as e:
        raise IdlLoadError(source, [f"Invalid YAML: {e}"]) from e
    except (OSError, UnicodeDecodeError) as e:
        raise IdlLoadError(source, [f"Cannot read: {e}"]) from e


def load_idl(path: str | Path) -> IdlDocument:
    """Read and validate an IDL file."""
    return parse_idl(read_idl_data(path), source=str(path))


def parse_idl(data, source: str = "<dict>") -> IdlDocument:
    """Validate a parsed document and build its descriptors."""
    schema_issues = validate_schema(data)
    if schema_issues:
        raise IdlLoadError(source, schema_issues)

    sem_result = validate_semantics(data)
    if not sem_result.passed:
        raise IdlLoadError(source, [f"[{i.code}] {i.message}" for i in sem_result.errors])
    for w in sem_result.warnings:
        logger.warning("%s: [%s] %s", source, w.code, w.message)

    doc = IdlDocument(
        name=data["name"],
        version=data.get("version", ""),
        instructions=[_build_instruction(ix) for ix in data["instructions"]],
    )
    logger.debug(
        "Loaded IDL %s %s from %s (%d instruction(s))",
        doc.name,
        doc.version or "(unversioned)",
        source,
        len(doc.instructions),
    )
    return doc


def _build_instruction(data: dict) -> InstructionDescriptor:
    return InstructionDescriptor(
        name=data["name"],
        docs=tuple(data.get("docs", [])),
        accounts=tuple(
            AccountRole(
                name=a["name"],
                is_mut=a["isMut"],
                is_signer=a["isSigner"],
                docs=tuple(a.get("docs", [])),
            )
            for a in data["accounts"]
        ),
        args=tuple(ArgDescriptor(name=a["name"], type=ArgType(a["type"])) for a in data["args"]),
    )

