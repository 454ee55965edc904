"""Command-line interface for ghostly."""

from ghostly.cli.app import cli

__all__ = ["cli"]
