"""Format command for adr-manager CLI.

Rewrites a MADR document in canonical form (parse + serialize).
"""

import typer

from adr_manager.cli_utils import (
    EXIT_ERROR,
    EXIT_PARSE_ERROR,
    _error,
    _resolve_config,
    _setup_logging,
    _success,
    _validate_file_path,
    _warning,
    console,
)
from adr_manager.core.exceptions import MadrSyntaxError
from adr_manager.madr import parse_document, serialize


def format_command(
    file: str = typer.Argument(..., help="MADR markdown file to format"),
    write: bool = typer.Option(
        False,
        "--write",
        "-w",
        help="Write the canonical form back to the file",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Exit with an error if the file is not in canonical form",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest .adr-manager.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Print (or write) a MADR document in canonical form.

    Whitespace and list markers are normalized; sections are emitted in
    template order and empty sections are dropped.

    Examples:
        adr-manager format 0001-use-postgres.md          # print to stdout
        adr-manager format 0001-use-postgres.md --write  # rewrite in place
        adr-manager format 0001-use-postgres.md --check  # CI check

    """
    _setup_logging(verbose=verbose, quiet=not verbose)
    file_path = _validate_file_path(file)
    madr_config = _resolve_config(config, file_path)

    original = file_path.read_text(encoding="utf-8")
    try:
        result = parse_document(original, madr_config)
    except MadrSyntaxError as e:
        _error(f"{file_path}: {e}")
        raise typer.Exit(code=EXIT_PARSE_ERROR) from None

    for warning in result.warnings:
        _warning(f"{file_path}: {warning}")

    canonical = serialize(result.record)

    if check:
        if canonical != original:
            _error(f"{file_path} is not in canonical form")
            raise typer.Exit(code=EXIT_ERROR)
        _success(f"{file_path} is in canonical form")
        return

    if write:
        if canonical == original:
            console.print(f"[dim]Unchanged:[/dim] {file_path}")
            return
        file_path.write_text(canonical, encoding="utf-8")
        _success(f"Formatted {file_path}")
        return

    typer.echo(canonical, nl=False)
