"""Error types raised by the IDL loader and the schema registry.

Every error is a local, synchronous validation failure: it signals a
mismatch between what a caller supplied and what the IDL declares.
None of them is transient, so none should be retried.
"""

from __future__ import annotations


class IdlError(Exception):
    """Base class for all ixschema errors."""


class DuplicateNameError(IdlError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Instruction '{name}' is already registered")


class UnknownInstructionError(IdlError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown instruction '{name}'")


class InvalidDescriptorError(IdlError):
    """A descriptor breaks a structural invariant (duplicate names, bad type)."""


class AccountShapeMismatchError(IdlError):
    """Provided accounts do not line up with the declared account roles.

    ``index`` is the first position at which the shapes diverge. For a
    length mismatch it is the length of the shorter sequence.
    """

    def __init__(self, instruction: str, index: int, reason: str):
        self.instruction = instruction
        self.index = index
        self.reason = reason
        super().__init__(f"{instruction}: account #{index}: {reason}")


class MissingArgumentError(IdlError):
    def __init__(self, instruction: str, arg: str):
        self.instruction = instruction
        self.arg = arg
        super().__init__(f"{instruction}: missing argument '{arg}'")


class TypeMismatchError(IdlError):
    def __init__(self, instruction: str, arg: str, arg_type: str, value):
        self.instruction = instruction
        self.arg = arg
        self.arg_type = arg_type
        self.value = value
        super().__init__(
            f"{instruction}: argument '{arg}' value {value!r} does not fit type '{arg_type}'"
        )


class TruncatedDataError(IdlError):
    def __init__(self, instruction: str, expected: int, actual: int):
        self.instruction = instruction
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{instruction}: need {expected} byte(s) of argument data, got {actual}"
        )


class IdlLoadError(IdlError):
    """An IDL document could not be read, parsed, or failed validation."""

    def __init__(self, source: str, issues: list[str]):
        self.source = source
        self.issues = list(issues)
        detail = "; ".join(self.issues) if self.issues else "unknown error"
        super().__init__(f"Failed to load IDL from {source}: {detail}")
