"""
Destination Resolver
====================

Turns the user's destination argument into the concrete file path the
downloaded asset is written to.

Rules:
- An existing directory receives ``<identifier><sniffed_extension>``.
- A path that does not exist yet but ends with a separator (``downloads/``)
  is treated as a directory that will be created. If it ends with a
  separator but names an existing file, it is rejected.
- Anything else is used verbatim. No extension is appended, and an
  extension already present is kept even if it disagrees with the response.

The resolver is a pure path computation. It may ask the file repository
whether a path is a directory, but it never creates anything.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional

from ghasset.core.errors import InvalidDestination
from ghasset.repository import LocalFileRepository
from ghasset.repository.protocol import FileRepositoryProtocol

PROTECTED_DIRECTORIES: FrozenSet[str] = frozenset(
    {"etc", "usr", "var", "sys", "proc", "root", "boot", "bin", "sbin"}
)

WINDOWS_RESERVED_CHARACTERS = '<>:"|?*'


@dataclass(frozen=True)
class ResolvedDestination:
    """
    Final location of a download.

    Attributes:
        final_path: File the response body is written to
        created_parent_dirs: Whether missing parent directories were created
            while writing (always False straight out of the resolver)
    """

    final_path: Path
    created_parent_dirs: bool = False


def validate_destination(destination: str) -> None:
    """
    Reject destinations that can never be written to.

    Raises:
        InvalidDestination: If the destination is empty, contains a NUL
            byte, a reserved character or a ``..`` component, points into a
            system directory, or is relative and leaves the working directory
    """
    if destination is None or not destination.strip():
        raise InvalidDestination("Destination path must not be empty.")

    if "\0" in destination:
        raise InvalidDestination("Destination path contains a NUL character.")

    if ".." in Path(destination).parts:
        raise InvalidDestination(
            f"Path traversal detected in destination path: {destination}"
        )

    if os.name == "nt":
        name = Path(destination).name
        bad = sorted({c for c in name if c in WINDOWS_RESERVED_CHARACTERS})
        if bad:
            raise InvalidDestination(
                f"Destination file name contains characters not allowed on this "
                f"filesystem: {' '.join(bad)}"
            )

    if os.path.isabs(destination):
        parts = Path(os.path.normpath(destination)).parts
        if len(parts) > 1 and parts[1].lower() in PROTECTED_DIRECTORIES:
            raise InvalidDestination(
                f"Access to system directories is not allowed: {destination}"
            )
    elif not _within_working_directory(destination):
        # Reachable only through symlinks once ".." is rejected
        raise InvalidDestination(
            f"Destination path must be within the current directory: {destination}"
        )


def _within_working_directory(destination: str) -> bool:
    cwd = os.path.realpath(os.getcwd())
    resolved = os.path.realpath(os.path.join(cwd, destination))
    return os.path.commonpath([cwd, resolved]) == cwd


def resolve_destination(
    destination: str,
    identifier: str,
    sniffed_extension: str = "",
    repository: Optional[FileRepositoryProtocol] = None,
) -> ResolvedDestination:
    """
    Resolve the path a download should be written to.

    Args:
        destination: Destination argument as given on the command line
        identifier: Asset identifier, used as the file name for directories
        sniffed_extension: Extension derived from the response, or ""
        repository: File repository used to inspect the destination

    Returns:
        ResolvedDestination for the download

    Raises:
        InvalidDestination: If the destination is unusable
    """
    validate_destination(destination)
    repository = repository or LocalFileRepository()

    if _names_directory(destination, repository):
        filename = f"{identifier}{sniffed_extension or ''}"
        return ResolvedDestination(final_path=Path(destination) / filename)

    return ResolvedDestination(final_path=Path(destination))


def _names_directory(destination: str, repository: FileRepositoryProtocol) -> bool:
    if repository.is_dir(destination):
        return True
    separators = ("/", os.sep) if os.altsep is None else ("/", os.sep, os.altsep)
    if not destination.endswith(separators):
        return False
    if repository.exists(destination):
        raise InvalidDestination(f"Destination is not a directory: {destination}")
    return True
