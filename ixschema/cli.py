"""ixschema CLI — inspect IDLs and encode/decode instruction arguments."""

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from ixschema import __version__
from ixschema.errors import IdlError

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """ixschema — schema-driven instruction encoder/decoder.

    IDL arguments accept a path to a JSON/YAML IDL file or the name of a
    packaged program (e.g. dummy_transfer_hook).
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _resolve_idl(idl: str):
    from ixschema.programs import program_path

    packaged = program_path(idl)
    return packaged if packaged is not None else idl


def _load_registry(idl: str):
    from ixschema.registry.schema_registry import SchemaRegistry

    return SchemaRegistry.from_path(_resolve_idl(idl))


def _fail(error: IdlError):
    console.print(f"[red]Error:[/] {error}", soft_wrap=True)
    sys.exit(1)


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("idl_path")
def validate(idl_path: str):
    """Validate an IDL file (schema + semantic checks)."""
    from ixschema.idl.loader import read_idl_data
    from ixschema.idl.schema_validator import validate_schema
    from ixschema.idl.semantic_validator import validate_semantics

    console.print(f"\n[bold blue]ixschema[/] — Validating: {idl_path}\n")

    try:
        data = read_idl_data(_resolve_idl(idl_path))
    except IdlError as e:
        _fail(e)

    # Gate 1: Schema
    schema_issues = validate_schema(data)
    if schema_issues:
        console.print("[red]Schema validation FAILED:[/]")
        for issue in schema_issues:
            console.print(f"  [red]x[/] {issue}")
        sys.exit(1)
    console.print("  [green]v[/] Schema validation passed")

    # Gate 2: Semantic
    sem_result = validate_semantics(data)
    if sem_result.errors:
        console.print("[red]Semantic validation FAILED:[/]")
        for issue in sem_result.errors:
            console.print(f"  [red]x[/] [{issue.code}] {issue.message}")
    else:
        console.print("  [green]v[/] Semantic validation passed")

    for w in sem_result.warnings:
        console.print(f"  [yellow]![/] [{w.code}] {w.message}")

    console.print(f"\n{sem_result.summary()}")
    if not sem_result.passed:
        sys.exit(1)
    console.print("[green]Valid![/]")


# ── Show ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("idl")
@click.argument("instruction", required=False)
def show(idl: str, instruction: str | None):
    """List instructions, or the accounts and args of one instruction."""
    try:
        reg = _load_registry(idl)
        descriptors = [reg.lookup(instruction)] if instruction else list(reg)
    except IdlError as e:
        _fail(e)

    if not instruction:
        table = Table(title=f"{reg.program} ({len(reg)} instructions)")
        table.add_column("Name", style="cyan")
        table.add_column("Discriminator", style="dim")
        table.add_column("Accounts", justify="right")
        table.add_column("Args")
        for ix in descriptors:
            args = ", ".join(f"{a.name}: {a.type.value}" for a in ix.args)
            table.add_row(ix.name, ix.discriminator.hex(), str(len(ix.accounts)), args)
        console.print(table)
        return

    ix = descriptors[0]
    table = Table(title=f"{ix.name} accounts")
    table.add_column("#", style="dim", width=3)
    table.add_column("Name", style="cyan")
    table.add_column("Mut", justify="center")
    table.add_column("Signer", justify="center")
    table.add_column("Docs")
    for i, account in enumerate(ix.accounts):
        table.add_row(
            str(i),
            account.name,
            "[green]Y[/]" if account.is_mut else "N",
            "[green]Y[/]" if account.is_signer else "N",
            " ".join(account.docs),
        )
    console.print(table)

    if ix.args:
        for arg in ix.args:
            console.print(f"  [cyan]{arg.name}[/]: {arg.type.value} ({arg.type.size} bytes)")
    else:
        console.print("  [dim]no arguments[/]")


# ── Encode / Decode ──────────────────────────────────────────────────


@main.command()
@click.argument("idl")
@click.argument("instruction")
@click.option("--arg", "-a", "arg_pairs", multiple=True, help="Argument as name=value")
@click.option(
    "--with-discriminator", is_flag=True, help="Prefix the 8-byte instruction discriminator"
)
def encode(idl: str, instruction: str, arg_pairs: tuple, with_discriminator: bool):
    """Encode instruction arguments and print them as hex."""
    from ixschema.codec.primitives import parse_literal

    try:
        reg = _load_registry(idl)
        descriptor = reg.lookup(instruction)
    except IdlError as e:
        _fail(e)

    types = {a.name: a.type for a in descriptor.args}
    args = {}
    for pair in arg_pairs:
        key, sep, text = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected name=value, got '{pair}'", param_hint="--arg")
        if key not in types:
            raise click.BadParameter(f"'{instruction}' has no argument '{key}'", param_hint="--arg")
        try:
            args[key] = parse_literal(types[key], text)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--arg") from e

    try:
        if with_discriminator:
            data = reg.encode_instruction(instruction, args)
        else:
            data = reg.encode_args(instruction, args)
    except IdlError as e:
        _fail(e)

    console.print(data.hex())


@main.command()
@click.argument("idl")
@click.argument("instruction")
@click.argument("hex_data")
def decode(idl: str, instruction: str, hex_data: str):
    """Decode hex-encoded argument bytes for INSTRUCTION.

    Pass '-' as INSTRUCTION to resolve it from the discriminator prefix.
    """
    try:
        data = bytes.fromhex(hex_data)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="HEX_DATA") from e

    try:
        reg = _load_registry(idl)
        if instruction == "-":
            instruction, values = reg.decode_instruction(data)
        else:
            values = reg.decode_args(instruction, data)
    except IdlError as e:
        _fail(e)

    console.print(f"[cyan]{instruction}[/]")
    for key, value in values.items():
        console.print(f"  {key} = {value}")


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
def dump_schema():
    """Print the JSON Schema for IDL documents."""
    import json

    from ixschema.idl.schema import get_schema

    console.print_json(json.dumps(get_schema()))


if __name__ == "__main__":
    main()
