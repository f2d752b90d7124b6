"""Core module for adr-manager configuration and errors.

This module provides:
- Configuration model and YAML loading via load_config()
- Project config discovery via find_project_config() / load_config_for()
- Custom exception hierarchy with AdrManagerError as base
"""

from adr_manager.core.config import (
    MAX_CONFIG_SIZE,
    PROJECT_CONFIG_NAME,
    MadrConfig,
    find_project_config,
    load_config,
    load_config_for,
)
from adr_manager.core.exceptions import (
    AdrManagerError,
    ConfigError,
    MadrSyntaxError,
)

__all__ = [
    # Config constants
    "MAX_CONFIG_SIZE",
    "PROJECT_CONFIG_NAME",
    # Config model
    "MadrConfig",
    # Config functions
    "find_project_config",
    "load_config",
    "load_config_for",
    # Exceptions
    "AdrManagerError",
    "ConfigError",
    "MadrSyntaxError",
]
