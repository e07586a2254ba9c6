"""Fixed-width little-endian encoding of primitive argument values.

Functions here know nothing about instructions: they raise ``ValueError``
for a value that does not fit its type, and the registry attaches the
instruction and argument names.

Integers and bools round-trip exactly. ``f32`` values are rounded to the
nearest float32 on encode, so only values float32 can represent exactly
(0.5, -1.25, 3.0) decode to the same Python float; 0.1 does not.
"""

from __future__ import annotations

import struct

from ixschema.idl.models import ArgType

_FLOAT_FORMATS = {
    ArgType.F32: "<f",
    ArgType.F64: "<d",
}


def int_range(arg_type: ArgType) -> tuple[int, int]:
    """Inclusive (min, max) for an integer type."""
    bits = arg_type.size * 8
    if arg_type.is_signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def encode_value(arg_type: ArgType, value) -> bytes:
    if arg_type is ArgType.BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"expected bool, got {type(value).__name__}")
        return b"\x01" if value else b"\x00"

    if arg_type.is_integer:
        # bool is an int subclass but never a valid integer argument
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected int, got {type(value).__name__}")
        low, high = int_range(arg_type)
        if not low <= value <= high:
            raise ValueError(f"{value} outside [{low}, {high}]")
        return value.to_bytes(arg_type.size, "little", signed=arg_type.is_signed)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected float, got {type(value).__name__}")
    try:
        return struct.pack(_FLOAT_FORMATS[arg_type], value)
    except OverflowError as e:
        raise ValueError(f"{value} does not fit {arg_type.value}") from e


def decode_value(arg_type: ArgType, data: bytes, offset: int = 0) -> tuple[object, int]:
    """Read one value at ``offset``. Returns the value and the next offset.

    The caller is responsible for making sure enough bytes remain.
    """
    end = offset + arg_type.size
    raw = bytes(data[offset:end])
    if len(raw) < arg_type.size:
        raise ValueError(f"need {arg_type.size} byte(s), got {len(raw)}")

    if arg_type is ArgType.BOOL:
        if raw not in (b"\x00", b"\x01"):
            raise ValueError(f"invalid bool byte 0x{raw.hex()}")
        return raw == b"\x01", end

    if arg_type.is_integer:
        return int.from_bytes(raw, "little", signed=arg_type.is_signed), end

    return struct.unpack(_FLOAT_FORMATS[arg_type], raw)[0], end


def parse_literal(arg_type: ArgType, text: str):
    """Convert a command-line literal into a Python value for ``arg_type``."""
    if arg_type is ArgType.BOOL:
        lowered = text.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise ValueError(f"not a bool literal: {text!r}")
    if arg_type.is_integer:
        return int(text, 0)
    return float(text)
