"""
Downloader
==========

Sequences a single attachment download:

    authenticating -> requesting -> resolving -> writing -> done

Each step has exactly one failure mode (AuthError, TransferError,
InvalidDestination, WriteError). Failures are terminal: they are tagged with
the step they happened in and raised once, never retried.

The body is written to a freshly created ``.<name>.<random>.part`` file next
to the final path and then moved over it. A failed write leaves no truncated
file behind and the existing destination, if any, intact.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional

from ghasset.core.assets import AssetRequest
from ghasset.core.auth import CredentialProvider
from ghasset.core.errors import GhAssetError, WriteError
from ghasset.core.http import TransferClient, TransferProgressCallback
from ghasset.core.logger import get_logger
from ghasset.core.resolver import ResolvedDestination, resolve_destination
from ghasset.core.sniff import sniff_extension
from ghasset.repository import LocalFileRepository
from ghasset.repository.protocol import FileRepositoryProtocol

logger = get_logger(__name__)

PART_SUFFIX = ".part"


class DownloadStep(str, Enum):
    """Steps of the download state machine, in order."""

    AUTHENTICATING = "authenticating"
    REQUESTING = "requesting"
    RESOLVING = "resolving"
    WRITING = "writing"
    DONE = "done"


@dataclass(frozen=True)
class DownloadOutcome:
    """What a finished download produced."""

    request: AssetRequest
    destination: ResolvedDestination
    content_type: Optional[str]
    extension: str
    bytes_written: int

    @property
    def path(self) -> Path:
        return self.destination.final_path

    def to_dict(self) -> dict:
        return {
            "identifier": self.request.identifier,
            "url": self.request.url,
            "path": str(self.destination.final_path),
            "created_parent_dirs": self.destination.created_parent_dirs,
            "content_type": self.content_type,
            "extension": self.extension,
            "bytes_written": self.bytes_written,
        }


class Downloader:
    """
    Runs one download end to end.

    Args:
        credential_provider: Source of the GitHub token
        transfer_client: HTTP client performing the request
        repository: File repository used for resolving and writing
        progress_callback: Callback(downloaded_bytes, total_bytes)
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        transfer_client: TransferClient,
        repository: Optional[FileRepositoryProtocol] = None,
        progress_callback: Optional[TransferProgressCallback] = None,
    ) -> None:
        self.credential_provider = credential_provider
        self.transfer_client = transfer_client
        self.repository = repository or LocalFileRepository()
        self.progress_callback = progress_callback
        self.step: Optional[DownloadStep] = None

    def download(self, request: AssetRequest) -> DownloadOutcome:
        """
        Download the requested asset.

        Returns:
            DownloadOutcome describing the written file

        Raises:
            AuthError: If no token could be obtained (no request is sent)
            TransferError: If the request failed (nothing is written)
            InvalidDestination: If the destination is unusable
            WriteError: If the file could not be written
        """
        self._enter(DownloadStep.AUTHENTICATING)
        token = self._run(self.credential_provider.get_token)

        self._enter(DownloadStep.REQUESTING)
        response = self._run(
            self.transfer_client.get,
            request.url,
            token,
            progress_callback=self.progress_callback,
        )
        logger.debug(
            f"Received {len(response.body)} bytes "
            f"(content-type: {response.content_type or 'none'})"
        )

        self._enter(DownloadStep.RESOLVING)
        extension = sniff_extension(response.content_type, response.url)
        resolved = self._run(
            resolve_destination,
            request.destination,
            request.identifier,
            extension,
            repository=self.repository,
        )
        logger.debug(f"Resolved destination: {resolved.final_path}")

        self._enter(DownloadStep.WRITING)
        resolved = self._write(resolved, response.body)

        self._enter(DownloadStep.DONE)
        return DownloadOutcome(
            request=request,
            destination=resolved,
            content_type=response.content_type,
            extension=extension,
            bytes_written=len(response.body),
        )

    def _enter(self, step: DownloadStep) -> None:
        self.step = step
        logger.debug(f"Download step: {step.value}")

    def _run(self, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GhAssetError as e:
            if e.step is None:
                e.step = self.step.value
            raise

    def _write(self, resolved: ResolvedDestination, body: bytes) -> ResolvedDestination:
        final_path = resolved.final_path
        parent = final_path.parent
        part_path: Optional[Path] = None

        created_parent_dirs = False
        try:
            if str(parent) not in ("", ".") and not self.repository.is_dir(parent):
                self.repository.mkdir(parent, parents=True)
                created_parent_dirs = True
                logger.debug(f"Created directory: {parent}")

            part_path = self.repository.create_temp_file(
                parent, prefix=f".{final_path.name}.", suffix=PART_SUFFIX
            )
            self.repository.write_binary(part_path, body)
            self.repository.replace_file(part_path, final_path)
        except OSError as e:
            if part_path is not None:
                self._discard(part_path)
            raise WriteError(
                f"Failed to write {final_path}: {e.strerror or e}",
                step=DownloadStep.WRITING.value,
            ) from e

        return replace(resolved, created_parent_dirs=created_parent_dirs)

    def _discard(self, part_path: Path) -> None:
        try:
            if self.repository.exists(part_path):
                self.repository.delete_file(part_path)
        except OSError as e:
            logger.warning(f"Could not remove partial file {part_path}: {e}")
