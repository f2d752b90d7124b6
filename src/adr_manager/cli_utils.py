"""Shared helpers for the adr-manager CLI.

Exit codes, rich console output helpers, logging setup and config
resolution used by all commands.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from adr_manager.core.config import MadrConfig, load_config, load_config_for
from adr_manager.core.exceptions import ConfigError

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_PARSE_ERROR = 3

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging on stderr.

    Args:
        verbose: Log DEBUG and above.
        quiet: Log ERROR and above only. Ignored if verbose is set.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")


def _warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {message}")


def _success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def _validate_file_path(path: str) -> Path:
    """Resolve path and ensure it is an existing file.

    Raises:
        typer.Exit: With EXIT_ERROR if the file does not exist.

    """
    file_path = Path(path).expanduser().resolve()
    if not file_path.exists():
        _error(f"File does not exist: {file_path}")
        raise typer.Exit(code=EXIT_ERROR)
    if not file_path.is_file():
        _error(f"Path is not a file: {file_path}")
        raise typer.Exit(code=EXIT_ERROR)
    return file_path


def _resolve_config(config_path: str | None, document: Path) -> MadrConfig:
    """Load the explicit config file, or the project config for document.

    Raises:
        typer.Exit: With EXIT_CONFIG_ERROR if the config is invalid.

    """
    try:
        if config_path:
            return load_config(config_path)
        return load_config_for(document)
    except ConfigError as e:
        _error(f"Config error: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
