"""Tests for the schema registry."""

import pytest

from ixschema.errors import (
    AccountShapeMismatchError,
    DuplicateNameError,
    InvalidDescriptorError,
    MissingArgumentError,
    TruncatedDataError,
    TypeMismatchError,
    UnknownInstructionError,
)
from ixschema.idl.models import (
    AccountMeta,
    AccountRole,
    ArgDescriptor,
    ArgType,
    InstructionDescriptor,
)
from ixschema.registry.schema_registry import SchemaRegistry

TRANSFER_HOOK_ACCOUNTS = [
    "sourceToken",
    "mint",
    "destinationToken",
    "authority",
    "extraAccountMetaList",
    "dummyAccount",
]


def _transfer_hook() -> InstructionDescriptor:
    return InstructionDescriptor(
        name="transferHook",
        accounts=[AccountRole(name=n) for n in TRANSFER_HOOK_ACCOUNTS],
        args=[ArgDescriptor(name="amount", type=ArgType.U64)],
    )


def _initialize() -> InstructionDescriptor:
    return InstructionDescriptor(
        name="initializeExtraAccountMetaList",
        accounts=[
            AccountRole(name="payer", is_mut=True, is_signer=True),
            AccountRole(name="extraAccountMetaList", is_mut=True),
            AccountRole(name="mint"),
            AccountRole(name="tokenProgram"),
            AccountRole(name="associatedTokenProgram"),
            AccountRole(name="systemProgram"),
        ],
    )


def _mixed() -> InstructionDescriptor:
    return InstructionDescriptor(
        name="configure",
        accounts=[AccountRole(name="admin", is_signer=True)],
        args=[
            ArgDescriptor(name="enabled", type=ArgType.BOOL),
            ArgDescriptor(name="fee_bps", type=ArgType.U16),
            ArgDescriptor(name="offset", type=ArgType.I32),
            ArgDescriptor(name="cap", type=ArgType.U128),
        ],
    )


def _registry() -> SchemaRegistry:
    return SchemaRegistry([_initialize(), _transfer_hook(), _mixed()])


def _metas(flags: list[tuple[bool, bool]]) -> list[AccountMeta]:
    return [
        AccountMeta(pubkey=f"acct{i}", is_signer=signer, is_writable=writable)
        for i, (signer, writable) in enumerate(flags)
    ]


# --- Registration ---


def test_register_and_lookup():
    reg = SchemaRegistry()
    reg.register(_transfer_hook())

    assert reg.lookup("transferHook") == _transfer_hook()
    assert "transferHook" in reg
    assert len(reg) == 1


def test_register_duplicate_leaves_registry_unchanged():
    reg = SchemaRegistry([_transfer_hook()])
    impostor = InstructionDescriptor(name="transferHook", accounts=[AccountRole(name="other")])

    with pytest.raises(DuplicateNameError) as exc:
        reg.register(impostor)

    assert exc.value.name == "transferHook"
    assert len(reg) == 1
    assert reg.lookup("transferHook") == _transfer_hook()


def test_register_discriminator_collision():
    reg = SchemaRegistry([_transfer_hook()])
    with pytest.raises(InvalidDescriptorError):
        reg.register(InstructionDescriptor(name="transfer_hook"))
    assert reg.names() == ["transferHook"]


def test_lookup_unknown():
    with pytest.raises(UnknownInstructionError):
        _registry().lookup("burn")


def test_names_keep_registration_order():
    assert _registry().names() == ["initializeExtraAccountMetaList", "transferHook", "configure"]


def test_descriptor_rejects_duplicate_account_names():
    with pytest.raises(InvalidDescriptorError):
        InstructionDescriptor(name="bad", accounts=[AccountRole(name="a"), AccountRole(name="a")])


def test_descriptor_rejects_duplicate_arg_names():
    with pytest.raises(InvalidDescriptorError):
        InstructionDescriptor(
            name="bad",
            args=[ArgDescriptor(name="x", type=ArgType.U8), ArgDescriptor(name="x", type=ArgType.U8)],
        )


def test_descriptor_rejects_untyped_arg():
    with pytest.raises(InvalidDescriptorError):
        InstructionDescriptor(name="bad", args=[ArgDescriptor(name="x", type="u64")])


# --- Accounts ---


def test_validate_accounts_exact_flags():
    reg = _registry()
    reg.validate_accounts("transferHook", _metas([(False, False)] * 6))
    reg.validate_accounts(
        "initializeExtraAccountMetaList",
        _metas([(True, True), (False, True)] + [(False, False)] * 4),
    )


def test_validate_accounts_too_short():
    with pytest.raises(AccountShapeMismatchError) as exc:
        _registry().validate_accounts("transferHook", _metas([(False, False)] * 4))
    assert exc.value.index == 4


def test_validate_accounts_too_long():
    with pytest.raises(AccountShapeMismatchError) as exc:
        _registry().validate_accounts("transferHook", _metas([(False, False)] * 7))
    assert exc.value.index == 6


def test_validate_accounts_signer_mismatch_reports_first_index():
    flags = [(False, False)] * 6
    flags[2] = (True, False)
    flags[4] = (True, False)
    with pytest.raises(AccountShapeMismatchError) as exc:
        _registry().validate_accounts("transferHook", _metas(flags))
    assert exc.value.index == 2
    assert "is_signer" in exc.value.reason


def test_validate_accounts_writable_mismatch():
    flags = [(True, False), (False, True)] + [(False, False)] * 4
    with pytest.raises(AccountShapeMismatchError) as exc:
        _registry().validate_accounts("initializeExtraAccountMetaList", _metas(flags))
    assert exc.value.index == 0
    assert "is_writable" in exc.value.reason


def test_validate_accounts_unknown_instruction():
    with pytest.raises(UnknownInstructionError):
        _registry().validate_accounts("burn", [])


# --- Arguments ---


def test_encode_transfer_hook_amount():
    data = _registry().encode_args("transferHook", {"amount": 1000})
    assert data == bytes([0xE8, 0x03, 0, 0, 0, 0, 0, 0])


def test_decode_transfer_hook_amount():
    reg = _registry()
    assert reg.decode_args("transferHook", bytes.fromhex("e803000000000000")) == {"amount": 1000}


def test_encode_no_args():
    assert _registry().encode_args("initializeExtraAccountMetaList", {}) == b""
    assert _registry().decode_args("initializeExtraAccountMetaList", b"") == {}


def test_encode_mixed_args_in_descriptor_order():
    reg = _registry()
    args = {"cap": 1, "offset": -1, "fee_bps": 250, "enabled": True}
    data = reg.encode_args("configure", args)

    assert len(data) == 1 + 2 + 4 + 16
    assert data[:1] == b"\x01"
    assert data[1:3] == (250).to_bytes(2, "little")
    assert data[3:7] == b"\xff\xff\xff\xff"
    assert data[7:] == b"\x01" + b"\x00" * 15
    assert reg.decode_args("configure", data) == args


def test_encode_round_trip_at_bounds():
    reg = _registry()
    for amount in (0, 1, 2**32, 2**64 - 1):
        encoded = reg.encode_args("transferHook", {"amount": amount})
        assert reg.decode_args("transferHook", encoded) == {"amount": amount}


def test_encode_extra_args_ignored():
    data = _registry().encode_args("transferHook", {"amount": 5, "memo": "hi"})
    assert data == (5).to_bytes(8, "little")


def test_encode_missing_argument():
    with pytest.raises(MissingArgumentError) as exc:
        _registry().encode_args("transferHook", {})
    assert exc.value.arg == "amount"


def test_encode_u64_overflow():
    with pytest.raises(TypeMismatchError) as exc:
        _registry().encode_args("transferHook", {"amount": 2**64})
    assert exc.value.arg == "amount"
    assert exc.value.arg_type == "u64"


def test_encode_negative_unsigned():
    with pytest.raises(TypeMismatchError):
        _registry().encode_args("transferHook", {"amount": -1})


def test_encode_wrong_python_type():
    reg = _registry()
    with pytest.raises(TypeMismatchError):
        reg.encode_args("transferHook", {"amount": "1000"})
    with pytest.raises(TypeMismatchError):
        reg.encode_args("transferHook", {"amount": True})
    with pytest.raises(TypeMismatchError):
        reg.encode_args("transferHook", {"amount": 10.0})


def test_decode_truncated():
    with pytest.raises(TruncatedDataError) as exc:
        _registry().decode_args("transferHook", b"\xe8\x03")
    assert exc.value.expected == 8
    assert exc.value.actual == 2


def test_decode_ignores_trailing_bytes():
    data = bytes.fromhex("e803000000000000") + b"\xff\xff"
    assert _registry().decode_args("transferHook", data) == {"amount": 1000}


def test_decode_invalid_bool_byte():
    data = b"\x02" + b"\x00" * 22
    with pytest.raises(TypeMismatchError) as exc:
        _registry().decode_args("configure", data)
    assert exc.value.arg == "enabled"


# --- Instruction data ---


def test_encode_instruction_prefixes_discriminator():
    data = _registry().encode_instruction("transferHook", {"amount": 1000})
    assert data == bytes.fromhex("dc39dc987e7d61a8") + bytes.fromhex("e803000000000000")


def test_decode_instruction_resolves_name():
    reg = _registry()
    data = reg.encode_instruction("transferHook", {"amount": 42})
    assert reg.decode_instruction(data) == ("transferHook", {"amount": 42})


def test_decode_instruction_unknown_discriminator():
    with pytest.raises(UnknownInstructionError):
        _registry().decode_instruction(b"\x00" * 16)


def test_decode_instruction_too_short():
    with pytest.raises(TruncatedDataError):
        _registry().decode_instruction(b"\xdc\x39")
