"""
HTTP Transfer Client
====================

Fetches a single attachment over HTTPS.

Features:
- Token authentication with the GitHub CLI token
- Transparent redirect following (the Authorization header is dropped by
  requests when a redirect leaves the original host, which signed storage
  URLs require)
- Streaming into one in-memory buffer with progress callbacks
- Every failure mapped to TransferError; nothing is retried
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import requests

from ghasset import __version__
from ghasset.core.errors import TransferError
from ghasset.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 300
DEFAULT_CHUNK_SIZE = 8192
DEFAULT_USER_AGENT = f"gh-asset/{__version__}"

# Callback(downloaded_bytes, total_bytes); total is 0 when unknown
TransferProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class TransferResponse:
    """
    Result of a successful transfer.

    Attributes:
        url: Final URL after redirects
        status_code: HTTP status of the final response
        headers: Final response headers, with lowercase names
        body: Complete response body
    """

    url: str
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")


class TransferClient:
    """
    HTTP client used to download attachments.

    Args:
        timeout: Request timeout in seconds (default: 300)
        user_agent: User-Agent header value
        chunk_size: Download chunk size in bytes
        session: Optional preconfigured requests.Session

    Example:
        >>> with TransferClient(timeout=60) as client:
        ...     response = client.get(url, token)
        >>> response.content_type
        'image/png'
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": "*/*"})

    def get(
        self,
        url: str,
        token: str,
        progress_callback: Optional[TransferProgressCallback] = None,
    ) -> TransferResponse:
        """
        Download a URL into memory.

        Args:
            url: URL to download from
            token: GitHub token sent as ``Authorization: token <token>``
            progress_callback: Callback(downloaded_bytes, total_bytes)

        Returns:
            TransferResponse with the final URL, headers and body

        Raises:
            TransferError: On network failure or a non-2xx status
        """
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(
                url,
                headers={"Authorization": f"token {token}"},
                timeout=self.timeout,
                stream=True,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise TransferError(f"Failed to send HTTP request: {e}") from e

        try:
            if not 200 <= response.status_code < 300:
                reason = response.reason or "Unknown error"
                raise TransferError(
                    f"HTTP request failed with status: {response.status_code} - {reason}",
                    status_code=response.status_code,
                    hint=_hint_for_status(response.status_code),
                )

            body = self._read_body(response, progress_callback)
            headers = {k.lower(): v for k, v in response.headers.items()}
            final_url = response.url or url
        finally:
            response.close()

        if final_url != url:
            logger.debug(f"Redirected to {final_url.split('?')[0]}")

        return TransferResponse(
            url=final_url,
            status_code=response.status_code,
            headers=headers,
            body=body,
        )

    def _read_body(
        self,
        response: requests.Response,
        progress_callback: Optional[TransferProgressCallback],
    ) -> bytes:
        total_size = _content_length(response)
        buffer = bytearray()

        try:
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if not chunk:
                    continue
                buffer.extend(chunk)
                if progress_callback:
                    progress_callback(len(buffer), total_size)
        except requests.RequestException as e:
            raise TransferError(f"Failed to read response body: {e}") from e

        return bytes(buffer)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _content_length(response: requests.Response) -> int:
    """Declared body size, or 0 when the header is missing or malformed."""
    raw = response.headers.get("content-length")
    try:
        size = int(raw) if raw else 0
    except ValueError:
        logger.debug(f"Ignoring invalid Content-Length: {raw!r}")
        return 0
    return max(size, 0)


def _hint_for_status(status_code: int) -> Optional[str]:
    if status_code in (401, 403):
        return "Check that your GitHub CLI account can see the issue or pull request."
    if status_code == 404:
        return "Check the asset ID; private attachments also require repository access."
    return None
