"""Exception hierarchy for adr-manager.

All errors raised by the package derive from AdrManagerError so callers
can catch them with a single except clause.
"""

from __future__ import annotations


class AdrManagerError(Exception):
    """Base exception for all adr-manager errors."""

    pass


class ConfigError(AdrManagerError):
    """Configuration loading or validation error.

    Raised when:
    - Config file does not exist or cannot be read
    - Config file is not valid YAML
    - Config values fail validation
    """

    pass


class MadrSyntaxError(AdrManagerError):
    """Document does not conform to the MADR grammar.

    This is a hard failure: the builder never runs on a document that the
    grammar rejected, so no partial record is produced.

    Attributes:
        line: 1-based line number where the problem was detected (if known).

    """

    def __init__(self, message: str, line: int | None = None) -> None:
        """Initialize MadrSyntaxError with location context.

        Args:
            message: Human-readable error message.
            line: 1-based line number of the offending line.

        """
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
