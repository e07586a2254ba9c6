"""In-memory schema registry for program instructions.

Descriptors are registered while the registry is being built (usually
from one IDL document) and only read afterwards. Every operation other
than ``register`` is a pure function of the registered descriptors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path

from ixschema.codec.discriminator import DISCRIMINATOR_SIZE
from ixschema.codec.primitives import decode_value, encode_value
from ixschema.errors import (
    AccountShapeMismatchError,
    DuplicateNameError,
    InvalidDescriptorError,
    MissingArgumentError,
    TruncatedDataError,
    TypeMismatchError,
    UnknownInstructionError,
)
from ixschema.idl.loader import load_idl
from ixschema.idl.models import AccountMeta, IdlDocument, InstructionDescriptor

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Named instruction descriptors with validation and argument encoding."""

    def __init__(self, descriptors: Iterable[InstructionDescriptor] = (), program: str = ""):
        self.program = program
        self._instructions: dict[str, InstructionDescriptor] = {}
        self._by_discriminator: dict[bytes, InstructionDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    @classmethod
    def from_document(cls, doc: IdlDocument) -> SchemaRegistry:
        return cls(doc.instructions, program=doc.name)

    @classmethod
    def from_path(cls, path: str | Path) -> SchemaRegistry:
        """Load an IDL file and register all of its instructions."""
        return cls.from_document(load_idl(path))

    # ── Registration and lookup ──────────────────────────────────────

    def register(self, descriptor: InstructionDescriptor):
        """Add a descriptor. Fails without changing the registry on a name clash."""
        if descriptor.name in self._instructions:
            raise DuplicateNameError(descriptor.name)

        disc = descriptor.discriminator
        clash = self._by_discriminator.get(disc)
        if clash is not None:
            raise InvalidDescriptorError(
                f"'{descriptor.name}' has the same discriminator as '{clash.name}'"
            )

        self._instructions[descriptor.name] = descriptor
        self._by_discriminator[disc] = descriptor
        logger.debug(
            "Registered %s (%d account(s), %d arg(s))",
            descriptor.name,
            len(descriptor.accounts),
            len(descriptor.args),
        )

    def lookup(self, name: str) -> InstructionDescriptor:
        try:
            return self._instructions[name]
        except KeyError:
            raise UnknownInstructionError(name) from None

    def names(self) -> list[str]:
        """Instruction names in registration order."""
        return list(self._instructions)

    def __contains__(self, name: object) -> bool:
        return name in self._instructions

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[InstructionDescriptor]:
        return iter(self._instructions.values())

    # ── Accounts ─────────────────────────────────────────────────────

    def validate_accounts(self, name: str, accounts: Sequence[AccountMeta]):
        """Check provided accounts against the declared roles, slot by slot.

        Each slot must match the role's signer and writable flags exactly.
        Raises AccountShapeMismatchError at the first mismatching index.
        """
        descriptor = self.lookup(name)
        roles = descriptor.accounts

        for index, (role, account) in enumerate(zip(roles, accounts)):
            if account.is_signer != role.is_signer:
                raise AccountShapeMismatchError(
                    name,
                    index,
                    f"'{role.name}' expects is_signer={role.is_signer}, got {account.is_signer}",
                )
            if account.is_writable != role.is_mut:
                raise AccountShapeMismatchError(
                    name,
                    index,
                    f"'{role.name}' expects is_writable={role.is_mut}, got {account.is_writable}",
                )

        if len(accounts) != len(roles):
            raise AccountShapeMismatchError(
                name,
                min(len(accounts), len(roles)),
                f"expected {len(roles)} account(s), got {len(accounts)}",
            )

    # ── Arguments ────────────────────────────────────────────────────

    def encode_args(self, name: str, args: Mapping[str, object]) -> bytes:
        """Serialize ``args`` in descriptor order as fixed-width little-endian fields."""
        descriptor = self.lookup(name)
        parts: list[bytes] = []

        for arg in descriptor.args:
            if arg.name not in args:
                raise MissingArgumentError(name, arg.name)
            value = args[arg.name]
            try:
                parts.append(encode_value(arg.type, value))
            except ValueError as e:
                raise TypeMismatchError(name, arg.name, arg.type.value, value) from e

        return b"".join(parts)

    def decode_args(self, name: str, data: bytes) -> dict[str, object]:
        """Inverse of ``encode_args``. Bytes past the declared payload are ignored."""
        descriptor = self.lookup(name)
        expected = descriptor.arg_size
        if len(data) < expected:
            raise TruncatedDataError(name, expected, len(data))
        if len(data) > expected:
            logger.debug("%s: ignoring %d trailing byte(s)", name, len(data) - expected)

        result: dict[str, object] = {}
        offset = 0
        for arg in descriptor.args:
            raw = bytes(data[offset : offset + arg.type.size])
            try:
                result[arg.name], offset = decode_value(arg.type, data, offset)
            except ValueError as e:
                raise TypeMismatchError(name, arg.name, arg.type.value, raw) from e
        return result

    # ── Instruction data ─────────────────────────────────────────────

    def encode_instruction(self, name: str, args: Mapping[str, object]) -> bytes:
        """Discriminator followed by the encoded arguments."""
        return self.lookup(name).discriminator + self.encode_args(name, args)

    def decode_instruction(self, data: bytes) -> tuple[str, dict[str, object]]:
        """Resolve the discriminator prefix and decode the arguments after it."""
        if len(data) < DISCRIMINATOR_SIZE:
            raise TruncatedDataError("<instruction>", DISCRIMINATOR_SIZE, len(data))

        disc = bytes(data[:DISCRIMINATOR_SIZE])
        descriptor = self._by_discriminator.get(disc)
        if descriptor is None:
            raise UnknownInstructionError(f"<discriminator {disc.hex()}>")
        return descriptor.name, self.decode_args(descriptor.name, data[DISCRIMINATOR_SIZE:])
