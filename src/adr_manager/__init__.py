"""adr-manager - convert MADR architectural decision records to and from structured data."""

from importlib.metadata import version

try:
    __version__ = version("adr-manager")
except Exception:
    __version__ = "0.0.0-dev"
