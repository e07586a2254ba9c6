"""Instruction descriptors and their parts.

Descriptors are frozen dataclasses holding tuples, so a registered
instruction can be shared between readers without copying or locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ixschema.codec.discriminator import instruction_discriminator
from ixschema.errors import InvalidDescriptorError


class ArgType(Enum):
    BOOL = "bool"
    U8 = "u8"
    I8 = "i8"
    U16 = "u16"
    I16 = "i16"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    U128 = "u128"
    I128 = "i128"
    F32 = "f32"
    F64 = "f64"

    @property
    def size(self) -> int:
        """Encoded width in bytes."""
        return _TYPE_SIZES[self]

    @property
    def is_integer(self) -> bool:
        return self.value[0] in ("u", "i")

    @property
    def is_signed(self) -> bool:
        return self.value[0] == "i"

    @property
    def is_float(self) -> bool:
        return self.value[0] == "f"


_TYPE_SIZES = {
    ArgType.BOOL: 1,
    ArgType.U8: 1,
    ArgType.I8: 1,
    ArgType.U16: 2,
    ArgType.I16: 2,
    ArgType.U32: 4,
    ArgType.I32: 4,
    ArgType.U64: 8,
    ArgType.I64: 8,
    ArgType.U128: 16,
    ArgType.I128: 16,
    ArgType.F32: 4,
    ArgType.F64: 8,
}

SUPPORTED_TYPES = frozenset(t.value for t in ArgType)


@dataclass(frozen=True)
class AccountRole:
    """A positional account slot in an instruction."""

    name: str
    is_mut: bool = False
    is_signer: bool = False
    docs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ArgDescriptor:
    name: str
    type: ArgType


@dataclass(frozen=True)
class InstructionDescriptor:
    """A named instruction: ordered account roles and ordered typed args.

    Order in ``accounts`` and ``args`` is part of the wire contract.
    """

    name: str
    accounts: tuple[AccountRole, ...] = ()
    args: tuple[ArgDescriptor, ...] = ()
    docs: tuple[str, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "docs", tuple(self.docs))

        if not self.name:
            raise InvalidDescriptorError("Instruction name must not be empty")
        _check_unique(self.name, "account", [a.name for a in self.accounts])
        _check_unique(self.name, "argument", [a.name for a in self.args])
        for arg in self.args:
            if not isinstance(arg.type, ArgType):
                raise InvalidDescriptorError(
                    f"{self.name}: argument '{arg.name}' has unsupported type {arg.type!r}"
                )

    @property
    def arg_size(self) -> int:
        """Total width of the encoded argument payload."""
        return sum(a.type.size for a in self.args)

    @property
    def discriminator(self) -> bytes:
        return instruction_discriminator(self.name)

    @property
    def account_names(self) -> list[str]:
        return [a.name for a in self.accounts]

    @property
    def arg_names(self) -> list[str]:
        return [a.name for a in self.args]


@dataclass(frozen=True)
class IdlDocument:
    """A parsed IDL: program name, version and its instructions."""

    name: str
    version: str = ""
    instructions: tuple[InstructionDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "instructions", tuple(self.instructions))


@dataclass(frozen=True)
class AccountMeta:
    """A concrete account supplied when building a call."""

    pubkey: str
    is_signer: bool = False
    is_writable: bool = False


def _check_unique(instruction: str, kind: str, names: list[str]):
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise InvalidDescriptorError(f"{instruction}: duplicate {kind} name '{name}'")
        seen.add(name)
