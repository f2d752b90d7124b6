"""Conversion commands for adr-manager CLI.

parse: MADR markdown -> structured record (JSON or YAML)
render: structured record (JSON or YAML) -> MADR markdown
"""

import json

import typer
import yaml

from adr_manager.cli_utils import (
    EXIT_ERROR,
    EXIT_PARSE_ERROR,
    _error,
    _resolve_config,
    _setup_logging,
    _validate_file_path,
    _warning,
)
from adr_manager.core.exceptions import MadrSyntaxError
from adr_manager.madr import ArchitecturalDecisionRecord, parse_document, serialize


def parse_command(
    file: str = typer.Argument(..., help="MADR markdown file to parse"),
    output_format: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Output format: json or yaml",
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
    """Parse a MADR document and print the structured record.

    Recovered problems (such as a malformed "Chosen option" line) are
    printed as warnings on stderr; the record is still printed.

    Examples:
        adr-manager parse docs/decisions/0001-use-postgres.md
        adr-manager parse 0001-use-postgres.md -f yaml

    """
    _setup_logging(verbose=verbose, quiet=not verbose)

    if output_format not in ("json", "yaml"):
        _error(f"Unknown format: {output_format}. Valid options: json, yaml")
        raise typer.Exit(code=EXIT_ERROR)

    file_path = _validate_file_path(file)
    madr_config = _resolve_config(config, file_path)

    try:
        result = parse_document(file_path.read_text(encoding="utf-8"), madr_config)
    except MadrSyntaxError as e:
        _error(f"{file_path}: {e}")
        raise typer.Exit(code=EXIT_PARSE_ERROR) from None

    for warning in result.warnings:
        _warning(f"{file_path}: {warning}")

    data = result.record.to_dict()
    if output_format == "yaml":
        typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
    else:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def render_command(
    file: str = typer.Argument(..., help="JSON or YAML record file"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Render a structured record (JSON or YAML) as MADR markdown.

    The input uses the same field names as 'adr-manager parse' prints.

    Examples:
        adr-manager parse 0001-use-postgres.md > record.json
        adr-manager render record.json

    """
    _setup_logging(verbose=verbose, quiet=not verbose)
    file_path = _validate_file_path(file)

    try:
        # JSON is a subset of YAML, one loader covers both
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        _error(f"Invalid JSON/YAML in {file_path}: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None

    try:
        record = ArchitecturalDecisionRecord.from_dict(data)
    except TypeError as e:
        _error(f"Invalid record in {file_path}: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None

    typer.echo(serialize(record), nl=False)
