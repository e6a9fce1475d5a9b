# tests/conftest.py
"""
Global pytest fixtures for gh-asset tests.
"""

import pytest

from ghasset.core.config import reset_config
from tests.mocks.fakes import FakeCredentialProvider, FakeTransferClient
from tests.mocks.mock_repository import MockFileRepository

ASSET_ID = "1234abcd-1234-1234-1234-1234abcd1234"


@pytest.fixture
def asset_id() -> str:
    """A valid user-attachment asset identifier."""
    return ASSET_ID


@pytest.fixture
def asset_url(asset_id) -> str:
    """The canonical download URL for asset_id."""
    return f"https://github.com/user-attachments/assets/{asset_id}"


@pytest.fixture
def credential_provider() -> FakeCredentialProvider:
    """Credential provider that always succeeds."""
    return FakeCredentialProvider()


@pytest.fixture
def transfer_client() -> FakeTransferClient:
    """Transfer client returning a small PNG payload."""
    return FakeTransferClient()


@pytest.fixture
def mock_repository() -> MockFileRepository:
    """Create a mock file repository for testing."""
    return MockFileRepository()


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate tests from GH_ASSET_* variables and the global config."""
    import os

    for name in list(os.environ):
        if name.startswith("GH_ASSET_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
