"""
Service Factory
===============

Reusable factory for instantiating services with proper dependency injection.

The factory builds the default collaborators (GitHub CLI credentials, a
requests-based transfer client, the local filesystem) from the active
configuration. Applications and tests override any of them through the
constructor.

Usage:
    from ghasset.services.factory import ServiceFactory

    factory = ServiceFactory()
    download_svc = factory.download

    # Tests - inject fakes
    factory = ServiceFactory(
        credential_provider=StaticCredentialProvider("token"),
        transfer_client=FakeTransferClient(...),
    )
"""

from typing import Optional

from ghasset.core.auth import CredentialProvider, GhCliCredentialProvider
from ghasset.core.config import Config, get_config
from ghasset.core.http import DEFAULT_USER_AGENT, TransferClient
from ghasset.repository import LocalFileRepository
from ghasset.repository.protocol import FileRepositoryProtocol

from .config import ConfigService
from .download import DownloadService


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    Attributes:
        config: Configuration used to build default collaborators
        file_repository: File repository implementation for file-based services
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        credential_provider: Optional[CredentialProvider] = None,
        transfer_client: Optional[TransferClient] = None,
        file_repository: Optional[FileRepositoryProtocol] = None,
    ):
        """
        Initialize the service factory.

        Args:
            config: Configuration to use. If None, uses the global config.
            credential_provider: Optional token source. If None, uses the GitHub CLI.
            transfer_client: Optional HTTP client. If None, one is built from config.
            file_repository: Optional custom file repository. If None, uses LocalFileRepository.
        """
        self.config = config or get_config()
        self._credential_provider = credential_provider
        self._transfer_client = transfer_client
        self.file_repository = file_repository or LocalFileRepository()

    @property
    def host(self) -> str:
        return self.config.get("github", "host", "github.com")

    @property
    def credential_provider(self) -> CredentialProvider:
        if self._credential_provider is None:
            host = self.host
            self._credential_provider = GhCliCredentialProvider(
                executable=self.config.get("auth", "gh_executable", "gh"),
                hostname=None if host == "github.com" else host,
                timeout=self.config.get("auth", "timeout", 30),
            )
        return self._credential_provider

    @property
    def transfer_client(self) -> TransferClient:
        if self._transfer_client is None:
            self._transfer_client = TransferClient(
                timeout=self.config.get("http", "timeout", 300),
                user_agent=self.config.get("http", "user_agent") or DEFAULT_USER_AGENT,
                chunk_size=self.config.get("http", "chunk_size", 8192),
            )
        return self._transfer_client

    def create_download_service(self) -> DownloadService:
        """Create DownloadService with the configured collaborators."""
        return DownloadService(
            credential_provider=self.credential_provider,
            transfer_client=self.transfer_client,
            file_repository=self.file_repository,
            host=self.host,
        )

    def create_config_service(self) -> ConfigService:
        """Create ConfigService."""
        return ConfigService()

    # Property-style accessors
    @property
    def download(self) -> DownloadService:
        return self.create_download_service()

    @property
    def config_service(self) -> ConfigService:
        return self.create_config_service()

    def close(self) -> None:
        """Release the HTTP session, if one was created."""
        if self._transfer_client is not None:
            self._transfer_client.close()
