"""Pytest fixtures for adr_manager.core tests.

Fixture Organization:
- write_config: Factory fixture to write config files to tmp_path

Usage in tests:
    def test_something(write_config):
        config_path = write_config("madr:\\n  title_matching: exact\\n")
        # ... use config_path
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing YAML content to a config file in tmp_path."""

    def _write(content: str, name: str = ".adr-manager.yaml") -> Path:
        config_path = tmp_path / name
        config_path.write_text(content, encoding="utf-8")
        return config_path

    return _write
