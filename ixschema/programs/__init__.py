"""IDLs shipped with the package.

Each packaged program is a JSON document next to this module, looked up
by its file stem.
"""

from __future__ import annotations

from pathlib import Path

from ixschema.errors import IdlLoadError
from ixschema.idl.loader import load_idl
from ixschema.idl.models import IdlDocument

PROGRAMS_DIR = Path(__file__).parent

DUMMY_TRANSFER_HOOK = "dummy_transfer_hook"


def available_programs() -> list[str]:
    return sorted(p.stem for p in PROGRAMS_DIR.glob("*.json"))


def program_path(name: str) -> Path | None:
    path = PROGRAMS_DIR / f"{name}.json"
    return path if path.exists() else None


def load_program(name: str) -> IdlDocument:
    """Load a packaged IDL by name, e.g. ``load_program("dummy_transfer_hook")``."""
    path = program_path(name)
    if path is None:
        raise IdlLoadError(name, [f"No packaged IDL named '{name}' (available: {available_programs()})"])
    return load_idl(path)
