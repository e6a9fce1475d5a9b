"""File repository layer for dependency injection."""

from ghasset.repository.local import LocalFileRepository
from ghasset.repository.protocol import FileRepositoryProtocol

__all__ = [
    "FileRepositoryProtocol",
    "LocalFileRepository",
]
