"""Semantic validator for IDL documents.

Goes beyond structural validation to check rules the JSON Schema cannot
express:
- Instruction names are unique within the document
- Account names and argument names are unique within an instruction
- No two instructions share a discriminator
- Instructions declare at least one account (warning only)

This is gate 2 of loading. It assumes gate 1 passed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ixschema.codec.discriminator import instruction_discriminator


class Severity(Enum):
    ERROR = "error"  # Blocks loading
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    severity: Severity
    code: str
    message: str
    path: str = ""  # e.g. "instructions[1].accounts[3]"


@dataclass
class SemanticValidationResult:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(i.severity == Severity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {len(self.errors)} error(s), {len(self.warnings)} warning(s)"


def validate_semantics(data: dict) -> SemanticValidationResult:
    """Run semantic validation on a parsed IDL document."""
    result = SemanticValidationResult()
    instructions = data.get("instructions", [])

    _check_version(data, result)
    _check_instruction_names(instructions, result)
    _check_discriminators(instructions, result)
    for i, ix in enumerate(instructions):
        _check_member_names(ix, "accounts", "DUPLICATE_ACCOUNT", f"instructions[{i}]", result)
        _check_member_names(ix, "args", "DUPLICATE_ARG", f"instructions[{i}]", result)
        _check_has_accounts(ix, f"instructions[{i}]", result)

    return result


def _check_version(data: dict, result: SemanticValidationResult):
    if not data.get("version"):
        result.issues.append(
            ValidationIssue(
                severity=Severity.INFO,
                code="VERSION_MISSING",
                message="IDL does not declare a 'version'; changes to the wire contract cannot be tracked.",
                path="version",
            )
        )


def _check_instruction_names(instructions: list[dict], result: SemanticValidationResult):
    seen: dict[str, int] = {}
    for i, ix in enumerate(instructions):
        name = ix.get("name", "")
        if name in seen:
            result.issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code="DUPLICATE_INSTRUCTION",
                    message=f"Instruction '{name}' is also declared at instructions[{seen[name]}]",
                    path=f"instructions[{i}].name",
                )
            )
        else:
            seen[name] = i


def _check_discriminators(instructions: list[dict], result: SemanticValidationResult):
    """Different names can still hash the same after snake-casing (fooBar / foo_bar)."""
    seen: dict[bytes, str] = {}
    for i, ix in enumerate(instructions):
        name = ix.get("name", "")
        disc = instruction_discriminator(name)
        other = seen.get(disc)
        if other is not None and other != name:
            result.issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code="DISCRIMINATOR_COLLISION",
                    message=f"Instruction '{name}' has the same discriminator as '{other}'",
                    path=f"instructions[{i}].name",
                )
            )
        else:
            seen[disc] = name


def _check_member_names(
    ix: dict, key: str, code: str, path: str, result: SemanticValidationResult
):
    seen: set[str] = set()
    for j, member in enumerate(ix.get(key, [])):
        name = member.get("name", "")
        if name in seen:
            result.issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=code,
                    message=f"Instruction '{ix.get('name', '')}' declares '{name}' twice in {key}",
                    path=f"{path}.{key}[{j}]",
                )
            )
        seen.add(name)


def _check_has_accounts(ix: dict, path: str, result: SemanticValidationResult):
    if not ix.get("accounts"):
        result.issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                code="NO_ACCOUNTS",
                message=f"Instruction '{ix.get('name', '')}' declares no accounts",
                path=f"{path}.accounts",
            )
        )
