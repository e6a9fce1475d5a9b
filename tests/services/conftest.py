"""Shared fixtures for service tests."""

import pytest

from ghasset.services.download import DownloadService


@pytest.fixture
def download_service(credential_provider, transfer_client) -> DownloadService:
    """DownloadService wired to fakes and the real filesystem."""
    return DownloadService(
        credential_provider=credential_provider,
        transfer_client=transfer_client,
    )
