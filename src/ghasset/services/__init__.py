# services/__init__.py
"""
Services Package
================

Application services that orchestrate between views (CLI, API) and core logic.

Services provide:
- A clean interface for views to invoke operations
- Conversion of core errors into ServiceResult failures
- Progress reporting

Architecture:
    View (CLI)
        ↓ (identifier, destination)
    DownloadService
        ↓ (delegates to)
    Core Downloader (credentials → transfer → resolver → write)

Usage:
    from ghasset.services import ServiceFactory

    result = ServiceFactory().download.download(asset_id, "./downloads/")
    if result.success:
        print(result.data.path)
"""

from .base import BaseService, ProgressCallback, ServiceResult, TransferProgress
from .config import ConfigService
from .download import DownloadService
from .factory import ServiceFactory

__all__ = [
    # Base
    "BaseService",
    "ServiceResult",
    "TransferProgress",
    "ProgressCallback",
    # Services
    "ConfigService",
    "DownloadService",
    # Factory
    "ServiceFactory",
]
