"""Check command for adr-manager CLI.

Validates MADR documents against the grammar and verifies that they
survive a serialize/parse round trip unchanged.
"""

from pathlib import Path

import typer

from adr_manager.cli_utils import (
    EXIT_ERROR,
    _error,
    _resolve_config,
    _setup_logging,
    _success,
    _validate_file_path,
    _warning,
    console,
)
from adr_manager.core.exceptions import MadrSyntaxError
from adr_manager.madr import parse, parse_document, serialize


def _check_file(file_path: Path, config: str | None, strict: bool) -> bool:
    """Check one document, printing findings. Returns True if it passes."""
    madr_config = _resolve_config(config, file_path)

    try:
        result = parse_document(file_path.read_text(encoding="utf-8"), madr_config)
    except MadrSyntaxError as e:
        _error(f"{file_path}: {e}")
        return False

    for warning in result.warnings:
        _warning(f"{file_path}: {warning}")

    try:
        reparsed = parse(serialize(result.record), madr_config)
    except MadrSyntaxError as e:
        _error(f"{file_path}: serialized output is rejected by the grammar: {e}")
        return False

    if reparsed != result.record:
        _error(f"{file_path}: record changes after a serialize/parse round trip")
        return False

    if strict and result.warnings:
        return False

    _success(f"{file_path}")
    return True


def check_command(
    files: list[str] = typer.Argument(..., help="MADR markdown files to check"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat recovered parse warnings as failures",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest .adr-manager.yaml per file)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Check MADR documents for syntax errors and round-trip stability.

    Examples:
        adr-manager check docs/decisions/*.md
        adr-manager check 0001-use-postgres.md --strict

    """
    _setup_logging(verbose=verbose, quiet=not verbose)

    failed = 0
    for file in files:
        file_path = _validate_file_path(file)
        if not _check_file(file_path, config, strict):
            failed += 1

    if failed:
        console.print(f"[red]{failed} of {len(files)} document(s) failed[/red]")
        raise typer.Exit(code=EXIT_ERROR)

    console.print(f"[green]All {len(files)} document(s) passed[/green]")
