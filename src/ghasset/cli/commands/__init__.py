"""CLI command modules for gh-asset."""

from .config import config
from .download import download

__all__ = [
    "config",
    "download",
]
