"""
Content-Type Sniffing
=====================

Maps HTTP responses to file extensions.

The extension is taken from the response's Content-Type header. When the
header is missing or generic (``application/octet-stream`` and friends), the
trailing segment of the final, post-redirect URL is used instead. Unknown
types produce an empty extension rather than an error.
"""

from pathlib import PurePosixPath
from typing import Dict, FrozenSet, Optional
from urllib.parse import unquote, urlsplit

CONTENT_TYPE_EXTENSIONS: Dict[str, str] = {
    # Images
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/pjpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
    "image/bmp": ".bmp",
    "image/tiff": ".tiff",
    "image/x-icon": ".ico",
    "image/vnd.microsoft.icon": ".ico",
    "image/avif": ".avif",
    "image/heic": ".heic",
    # Video
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/webm": ".webm",
    # Documents
    "application/pdf": ".pdf",
    "application/json": ".json",
    "text/plain": ".txt",
    "text/csv": ".csv",
    "text/markdown": ".md",
    "text/x-log": ".log",
    # Archives
    "application/zip": ".zip",
    "application/x-zip-compressed": ".zip",
    "application/gzip": ".gz",
    "application/x-gzip": ".gz",
}

GENERIC_CONTENT_TYPES: FrozenSet[str] = frozenset(
    {
        "application/octet-stream",
        "binary/octet-stream",
        "application/binary",
        "application/x-download",
        "application/force-download",
    }
)

# Alternative spellings seen in URLs, normalised to the table's extension
_EXTENSION_ALIASES: Dict[str, str] = {
    ".jpeg": ".jpg",
    ".jpe": ".jpg",
    ".tif": ".tiff",
    ".markdown": ".md",
}

KNOWN_EXTENSIONS: FrozenSet[str] = frozenset(CONTENT_TYPE_EXTENSIONS.values())


def normalize_content_type(content_type: Optional[str]) -> str:
    """Lowercase a Content-Type value and drop its parameters."""
    if not content_type:
        return ""
    return content_type.lower().split(";")[0].strip()


def extension_from_content_type(content_type: Optional[str]) -> str:
    """
    Map an HTTP Content-Type header to a file extension.

    Args:
        content_type: The Content-Type header value

    Returns:
        The corresponding file extension (including dot), or empty string if unknown
    """
    return CONTENT_TYPE_EXTENSIONS.get(normalize_content_type(content_type), "")


def extension_from_url(url: Optional[str]) -> str:
    """
    Extract a known file extension from the last segment of a URL path.

    Query strings and fragments are ignored. Suffixes that do not belong to a
    known content type produce an empty string.
    """
    if not url:
        return ""

    path = unquote(urlsplit(url).path)
    suffix = PurePosixPath(path).suffix.lower()
    suffix = _EXTENSION_ALIASES.get(suffix, suffix)

    return suffix if suffix in KNOWN_EXTENSIONS else ""


def is_generic_content_type(content_type: Optional[str]) -> bool:
    """True when the header is absent or says nothing about the format."""
    normalized = normalize_content_type(content_type)
    return not normalized or normalized in GENERIC_CONTENT_TYPES


def sniff_extension(content_type: Optional[str], url: Optional[str] = None) -> str:
    """
    Decide the extension for a downloaded asset.

    Args:
        content_type: Content-Type of the final response (may be None)
        url: Final URL after redirects, used when the header is unhelpful

    Returns:
        Extension including the leading dot, or "" when nothing matched
    """
    if not is_generic_content_type(content_type):
        return extension_from_content_type(content_type)
    return extension_from_url(url)
