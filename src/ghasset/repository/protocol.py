"""Abstract protocol for file repository operations."""

from pathlib import Path
from typing import Protocol, Union


class FileRepositoryProtocol(Protocol):
    """Protocol defining file repository operations.

    The destination resolver and the downloader touch the filesystem only
    through this interface, so tests can swap in an in-memory repository.
    """

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if a file or directory exists."""
        ...

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        ...

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        ...

    def read_binary(self, path: Union[str, Path]) -> bytes:
        """Read file contents as bytes."""
        ...

    def write_binary(self, path: Union[str, Path], data: bytes) -> None:
        """Write bytes to file, truncating any existing content."""
        ...

    def mkdir(self, path: Union[str, Path], parents: bool = True) -> None:
        """Create directory (and parents if needed)."""
        ...

    def delete_file(self, path: Union[str, Path]) -> None:
        """Delete a file."""
        ...

    def replace_file(self, source: Union[str, Path], destination: Union[str, Path]) -> None:
        """Move a file over destination, replacing any existing file."""
        ...

    def create_temp_file(self, directory: Union[str, Path], prefix: str = "", suffix: str = "") -> Path:
        """Create a new empty file with a unique name in directory."""
        ...
