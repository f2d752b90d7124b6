"""Configuration models and YAML loading for adr-manager.

The converter itself has no global state: a MadrConfig instance is passed
explicitly to parse() and friends. Config objects are frozen so one
instance can be shared safely between concurrent conversions.

Usage:
    from adr_manager.core.config import load_config_for

    config = load_config_for(Path("docs/decisions/0001-use-postgres.md"))
    record = parse(text, config=config)

File format (.adr-manager.yaml):
    madr:
      title_matching: prefix   # or "exact"
      explanation_policy: first  # or "legacy"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adr_manager.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Name of the per-project config file discovered by find_project_config()
PROJECT_CONFIG_NAME = ".adr-manager.yaml"

# Maximum config file size (1MB) - protects against accidentally huge files
MAX_CONFIG_SIZE = 1_048_576

TitleMatching = Literal["prefix", "exact"]
ExplanationPolicy = Literal["first", "legacy"]


class MadrConfig(BaseModel):
    """Settings for MADR parsing.

    Attributes:
        title_matching: How option headings are matched to declared options.
            "prefix" accepts equal or prefix-related normalized titles,
            "exact" only accepts equal normalized titles.
        explanation_policy: How "Chosen option: X, because Y" is split.
            "first" splits on the first ", because" only; "legacy" splits
            on every occurrence and rejoins the explanation fragments with
            a single comma.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title_matching: TitleMatching = Field(
        default="prefix",
        description="Option title matching strategy: prefix or exact",
    )
    explanation_policy: ExplanationPolicy = Field(
        default="first",
        description="Split policy for the chosen-option explanation: first or legacy",
    )


def _read_config_file(path: Path) -> str:
    """Read config file text, enforcing existence and size limits."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        size = path.stat().st_size
        if size > MAX_CONFIG_SIZE:
            raise ConfigError(
                f"Config file {path} exceeds 1MB limit ({size} > {MAX_CONFIG_SIZE} bytes)"
            )
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _parse_config_data(content: str, path: Path) -> dict[str, Any]:
    """Parse YAML text into the settings mapping."""
    if not content.strip():
        raise ConfigError(f"Config file is empty or whitespace only: {path}")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        location = f" (line {mark.line + 1})" if mark is not None else ""
        raise ConfigError(f"Invalid YAML in {path}{location}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )

    # Settings may live under a "madr:" section or at the top level
    if "madr" in data:
        section = data["madr"]
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(f"'madr' section in {path} must be a mapping")
        return section
    return data


def load_config(path: Path | str) -> MadrConfig:
    """Load and validate a config file.

    Args:
        path: Path to a YAML config file. '~' is expanded.

    Returns:
        Validated MadrConfig.

    Raises:
        ConfigError: If the file is missing, unreadable, too large, not valid
            YAML, or fails validation.

    """
    config_path = Path(path).expanduser()
    content = _read_config_file(config_path)
    data = _parse_config_data(content, config_path)

    try:
        config = MadrConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug("Loaded config from %s: %s", config_path, config)
    return config


def find_project_config(start: Path | str) -> Path | None:
    """Find the nearest project config file.

    Looks for PROJECT_CONFIG_NAME in start (or its parent if start is a
    file) and then in each ancestor directory.

    Args:
        start: File or directory to start searching from.

    Returns:
        Path to the config file, or None if none exists.

    """
    current = Path(start).expanduser().resolve()
    if not current.is_dir():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / PROJECT_CONFIG_NAME
        if candidate.is_file():
            logger.debug("Found project config: %s", candidate)
            return candidate
    return None


def load_config_for(path: Path | str) -> MadrConfig:
    """Load the project config that applies to path, or defaults.

    Args:
        path: Document or directory the config should apply to.

    Returns:
        MadrConfig from the nearest project config file, or MadrConfig()
        when there is none.

    Raises:
        ConfigError: If a config file exists but is invalid.

    """
    config_path = find_project_config(path)
    if config_path is None:
        return MadrConfig()
    return load_config(config_path)
