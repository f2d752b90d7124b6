"""Command-line interface for adr-manager."""

import typer

from adr_manager import __version__
from adr_manager.commands.check import check_command
from adr_manager.commands.convert import parse_command, render_command
from adr_manager.commands.format import format_command

app = typer.Typer(
    name="adr-manager",
    help="Convert MADR architectural decision records to and from structured data",
    no_args_is_help=True,
)

app.command("parse")(parse_command)
app.command("render")(render_command)
app.command("format")(format_command)
app.command("check")(check_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"adr-manager {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """adr-manager command-line interface."""


if __name__ == "__main__":
    app()
