"""Command line interface for gh-asset."""

from .cli import cli

__all__ = ["cli"]
