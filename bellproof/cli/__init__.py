"""Command-line interface for bellproof."""

from bellproof.cli.prove import cli

__all__ = ["cli"]
