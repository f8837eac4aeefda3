"""
typegrammar CLI utilities.

Shared helpers used by the CLI commands.
"""

import logging
import os
from functools import reduce
from pathlib import Path

import typer

from typegrammar._version import get_version
from typegrammar.core.ir import SchemaSpec
from typegrammar.core.loader import load_enum_file, load_schema_file

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool) -> None:
    """Configure root logging; ``--verbose`` wins over ``LOG_LEVEL``."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"typegrammar {get_version()}")
        raise typer.Exit()


def load_sources(schema_paths: list[Path], enum_paths: list[Path] | None = None) -> SchemaSpec:
    """
    Load and merge schema files, enumeration sources first.

    Raises:
        ParseError: If any file cannot be read or parsed
    """
    specs = [load_enum_file(path) for path in enum_paths or []]
    specs.extend(load_schema_file(path) for path in schema_paths)
    return reduce(SchemaSpec.merged_with, specs, SchemaSpec())


def write_output(text: str, output: Path | None) -> None:
    """Write grammar text to a file (creating parents) or stdout."""
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
