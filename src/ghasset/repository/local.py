"""Local filesystem implementation of FileRepositoryProtocol."""

import os
import secrets
from pathlib import Path
from typing import Union

TEMP_FILE_ATTEMPTS = 100


class LocalFileRepository:
    """Implementation of FileRepositoryProtocol using local filesystem."""

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if a file or directory exists."""
        return Path(path).exists()

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        return Path(path).is_file()

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def read_binary(self, path: Union[str, Path]) -> bytes:
        """Read file contents as bytes."""
        return Path(path).read_bytes()

    def write_binary(self, path: Union[str, Path], data: bytes) -> None:
        """Write bytes to file and flush them to disk."""
        with open(path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    def mkdir(self, path: Union[str, Path], parents: bool = True) -> None:
        """Create directory (and parents if needed)."""
        Path(path).mkdir(parents=parents, exist_ok=True)

    def delete_file(self, path: Union[str, Path]) -> None:
        """Delete a file."""
        Path(path).unlink()

    def replace_file(self, source: Union[str, Path], destination: Union[str, Path]) -> None:
        """Atomically move source over destination."""
        os.replace(source, destination)

    def create_temp_file(self, directory: Union[str, Path], prefix: str = "", suffix: str = "") -> Path:
        """Create a new empty file with a unique name in directory.

        Unlike tempfile.mkstemp the file gets the usual umask-derived mode,
        since it is renamed into place as the final download.
        """
        for _ in range(TEMP_FILE_ATTEMPTS):
            path = Path(directory) / f"{prefix}{secrets.token_hex(4)}{suffix}"
            try:
                fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
            except FileExistsError:
                continue
            os.close(fd)
            return path
        raise FileExistsError(f"No free temporary file name in {directory}")
