"""
Compilation commands: compile, check, build.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from typegrammar.api import compile_schema, compile_to_text
from typegrammar.cli.utils import load_sources, write_output
from typegrammar.core.assembler import CompilerOptions
from typegrammar.core.errors import TypeGrammarError
from typegrammar.core.manifest import load_manifest
from typegrammar.core.serializer import validate_grammar

logger = logging.getLogger(__name__)
console = Console()


def _fail(error: TypeGrammarError) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


def compile_command(
    schema: Annotated[Path, typer.Argument(help="Schema source (.ts) or declaration document")],
    root: Annotated[str, typer.Option("--root", "-r", help="Root interface name")],
    enums: Annotated[
        list[Path] | None,
        typer.Option("--enums", "-e", help="Extra enum-only source (repeatable)"),
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write grammar here instead of stdout")
    ] = None,
    lazy_lists: Annotated[
        bool,
        typer.Option("--lazy-lists", help="Only emit list elements for records used as arrays"),
    ] = False,
) -> None:
    """
    Compile a schema into grammar text.
    """
    options = CompilerOptions(list_elements="referenced" if lazy_lists else "all")
    try:
        spec = load_sources([schema], enums)
        text = compile_to_text(spec, root, options)
    except TypeGrammarError as e:
        raise _fail(e) from e

    write_output(text, output)
    if output is not None:
        console.print(f"[green]Wrote grammar for {root} to {output}[/green]")


def check_command(
    schema: Annotated[Path, typer.Argument(help="Schema source (.ts) or declaration document")],
    root: Annotated[str, typer.Option("--root", "-r", help="Root interface name")],
    enums: Annotated[
        list[Path] | None,
        typer.Option("--enums", "-e", help="Extra enum-only source (repeatable)"),
    ] = None,
) -> None:
    """
    Compile and validate a schema, listing the grammar's elements.
    """
    try:
        spec = load_sources([schema], enums)
        grammar = compile_schema(spec, root)
        validate_grammar(grammar)
    except TypeGrammarError as e:
        raise _fail(e) from e

    table = Table(title=f"Grammar for {root}")
    table.add_column("Element")
    table.add_column("Alternatives", justify="right")
    table.add_column("References", style="dim")

    for element in grammar.elements:
        referees = dict.fromkeys(ref.referee for ref in element.references())
        table.add_row(element.identifier, str(len(element.alternatives)), ", ".join(referees))

    console.print(table)
    console.print(f"\n[green]OK[/green] {len(grammar)} element(s)")


def build_command(
    manifest: Annotated[
        Path, typer.Option("--manifest", "-m", help="Path to typegrammar.toml")
    ] = Path("typegrammar.toml"),
) -> None:
    """
    Compile the project described by a typegrammar.toml manifest.
    """
    try:
        mf = load_manifest(manifest.resolve())
        spec = load_sources(mf.schema_paths, mf.enum_paths)
        options = CompilerOptions(list_elements=mf.compiler.list_elements)
        text = compile_to_text(spec, mf.root, options)
    except TypeGrammarError as e:
        raise _fail(e) from e

    logger.info("Built %s (%d bytes)", mf.name, len(text))
    write_output(text, mf.output_path)
    if mf.output_path is not None:
        console.print(f"[green]Built {mf.name}: {mf.output_path}[/green]")
