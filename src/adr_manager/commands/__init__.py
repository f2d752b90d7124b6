"""CLI command implementations for adr-manager."""
