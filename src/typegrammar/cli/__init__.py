"""
typegrammar CLI package.

- commands.py: compile, check and build commands
- utils.py: logging setup, source loading and output helpers
"""

from typing import Annotated

import typer

from typegrammar._version import get_version
from typegrammar.cli.commands import build_command, check_command, compile_command
from typegrammar.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""typegrammar - compile interface and enum declarations into JSON grammars

Commands:
  • compile: schema file -> grammar text
  • check: validate a schema and list its grammar elements
  • build: compile the project described by typegrammar.toml
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Enable debug logging")
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """typegrammar CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="compile")(compile_command)
app.command(name="check")(check_command)
app.command(name="build")(build_command)


@app.command(name="version")
def version_command() -> None:
    """Show the installed typegrammar version."""
    typer.echo(f"typegrammar {get_version()}")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]
