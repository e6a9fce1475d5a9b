"""
HTTP Transfer
=============

Requests-based client that downloads a single attachment, following
redirects and exposing the final headers and body.
"""

from .client import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    TransferClient,
    TransferProgressCallback,
    TransferResponse,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "TransferClient",
    "TransferProgressCallback",
    "TransferResponse",
]
