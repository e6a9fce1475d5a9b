"""
gh-asset - Download GitHub issue & pull request attachments
===========================================================

Version: 0.2.0
"""

__version__ = "0.2.0"

from ghasset.core.assets import AssetReference, AssetRequest
from ghasset.core.errors import (
    AuthError,
    GhAssetError,
    InvalidAssetError,
    InvalidDestination,
    TransferError,
    WriteError,
)

__all__ = [
    "__version__",
    # Requests
    "AssetReference",
    "AssetRequest",
    # Errors
    "GhAssetError",
    "InvalidAssetError",
    "AuthError",
    "TransferError",
    "InvalidDestination",
    "WriteError",
]
