"""Instruction discriminators.

Anchor programs dispatch on the first 8 bytes of instruction data:
``sha256("global:" + snake_case(name))[:8]``. IDLs spell instruction
names in camelCase, so the name is converted before hashing.
"""

from __future__ import annotations

import hashlib
import re

DISCRIMINATOR_SIZE = 8
NAMESPACE = "global"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def snake_case(name: str) -> str:
    """Convert ``transferHook`` to ``transfer_hook``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def instruction_discriminator(name: str, namespace: str = NAMESPACE) -> bytes:
    preimage = f"{namespace}:{snake_case(name)}".encode()
    return hashlib.sha256(preimage).digest()[:DISCRIMINATOR_SIZE]
