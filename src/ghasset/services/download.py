# services/download.py
"""
Service for downloading GitHub issue and pull request attachments.
"""

from typing import TYPE_CHECKING, Optional

from ghasset.core.assets import DEFAULT_HOST, AssetRequest
from ghasset.core.downloader import Downloader, DownloadOutcome
from ghasset.core.errors import GhAssetError
from ghasset.core.logger import get_logger

from .base import BaseService, ServiceResult, TransferProgress

if TYPE_CHECKING:
    from ghasset.core.auth import CredentialProvider
    from ghasset.core.http import TransferClient
    from ghasset.repository.protocol import FileRepositoryProtocol

logger = get_logger(__name__)


class DownloadService(BaseService):
    """
    Service for attachment downloads.

    Wraps the core Downloader and reports every failure as a failed
    ServiceResult naming the error category and the step that broke.

    Example:
        >>> service = DownloadService(
        ...     credential_provider=GhCliCredentialProvider(),
        ...     transfer_client=TransferClient(),
        ... )
        >>> result = service.download("1234abcd-1234-1234-1234-1234abcd1234", "./downloads/")
        >>> if result.success:
        ...     print(result.data.path)
    """

    def __init__(
        self,
        credential_provider: "CredentialProvider",
        transfer_client: "TransferClient",
        file_repository: Optional["FileRepositoryProtocol"] = None,
        host: str = DEFAULT_HOST,
    ) -> None:
        """
        Initialize the download service.

        Args:
            credential_provider: Source of the GitHub token
            transfer_client: HTTP client used for the request
            file_repository: File repository used to resolve and write the destination
            host: GitHub host attachments are expected on
        """
        super().__init__(file_repository)
        self.credential_provider = credential_provider
        self.transfer_client = transfer_client
        self.host = host

    def download(
        self,
        identifier_or_url: str,
        destination: str,
    ) -> ServiceResult[DownloadOutcome]:
        """
        Download one attachment.

        Args:
            identifier_or_url: Asset ID or attachment URL
            destination: Existing directory or target file path

        Returns:
            ServiceResult containing the DownloadOutcome on success
        """
        downloader = Downloader(
            credential_provider=self.credential_provider,
            transfer_client=self.transfer_client,
            repository=self.file_repository,
            progress_callback=self._on_transfer_progress,
        )

        try:
            request = AssetRequest.create(identifier_or_url, destination, host=self.host)
            outcome = downloader.download(request)
        except GhAssetError as e:
            logger.debug(f"Download failed during {e.step or 'request validation'}: {e.message}")
            return ServiceResult.fail(
                f"{e.label}: {e}",
                step=e.step,
                code=e.code,
            )

        return ServiceResult.ok(
            data=outcome,
            message=f"Downloaded {outcome.bytes_written} bytes to {outcome.path}",
            path=str(outcome.path),
        )

    def _on_transfer_progress(self, downloaded: int, total: int) -> None:
        self._report_progress(TransferProgress(downloaded=downloaded, total=total))
