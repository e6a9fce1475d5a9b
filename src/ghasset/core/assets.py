"""
Asset Identifiers
=================

Parsing and validation of GitHub attachment identifiers.

GitHub stores files dropped into issues and pull requests under
``https://github.com/user-attachments/assets/<id>``, where ``<id>`` is a
UUID-like string. Older attachments in private repositories live under
``https://github.com/<owner>/<repo>/assets/<number>/<id>``.

Both a bare identifier and either URL form are accepted on the command line.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from ghasset.core.errors import InvalidAssetError

DEFAULT_HOST = "github.com"

MIN_ASSET_ID_LENGTH = 20
MAX_ASSET_ID_LENGTH = 50

_UUID_PATTERN = re.compile(
    r"^[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}$"
)
_LOOSE_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]{18,48}[a-zA-Z0-9]$")


@dataclass(frozen=True)
class AssetReference:
    """An asset identifier together with the URL it is downloaded from."""

    identifier: str
    url: str


@dataclass(frozen=True)
class AssetRequest:
    """
    A single download request, built once from the command line arguments.

    Attributes:
        identifier_or_url: The argument exactly as the user typed it
        destination: Destination path or directory, unresolved
        reference: Parsed identifier and download URL
    """

    identifier_or_url: str
    destination: str
    reference: AssetReference

    @property
    def identifier(self) -> str:
        return self.reference.identifier

    @property
    def url(self) -> str:
        return self.reference.url

    @classmethod
    def create(
        cls,
        identifier_or_url: str,
        destination: str,
        host: str = DEFAULT_HOST,
    ) -> "AssetRequest":
        """
        Validate the arguments and build a request.

        The destination is validated later, by the destination resolver.

        Raises:
            InvalidAssetError: If the identifier or URL is not usable
        """
        reference = parse_asset_reference(identifier_or_url, host=host)
        return cls(
            identifier_or_url=identifier_or_url,
            destination=destination,
            reference=reference,
        )


def is_valid_asset_id(asset_id: str) -> bool:
    """
    Check whether a string looks like a GitHub asset identifier.

    Accepts canonical UUIDs and GitHub's longer alphanumeric form, which
    must contain at least two hyphens.
    """
    if not asset_id:
        return False

    if len(asset_id) < MIN_ASSET_ID_LENGTH or len(asset_id) > MAX_ASSET_ID_LENGTH:
        return False

    if "-" not in asset_id:
        return False

    if _UUID_PATTERN.match(asset_id):
        return True

    return bool(_LOOSE_PATTERN.match(asset_id)) and asset_id.count("-") >= 2


def build_asset_url(asset_id: str, host: str = DEFAULT_HOST) -> str:
    """
    Build the download URL for a bare asset identifier.

    Raises:
        InvalidAssetError: If the identifier is malformed
    """
    if not is_valid_asset_id(asset_id):
        raise InvalidAssetError()
    return f"https://{host}/user-attachments/assets/{asset_id}"


def parse_asset_reference(identifier_or_url: str, host: str = DEFAULT_HOST) -> AssetReference:
    """
    Parse a bare identifier or an attachment URL.

    Args:
        identifier_or_url: Asset identifier or full attachment URL
        host: GitHub host the attachment must live on

    Returns:
        AssetReference with the identifier and the URL to request

    Raises:
        InvalidAssetError: If the value is neither a valid identifier nor a
            recognised attachment URL
    """
    value = (identifier_or_url or "").strip()
    if not value:
        raise InvalidAssetError("Asset identifier or URL must not be empty.")

    if "://" not in value:
        return AssetReference(identifier=value, url=build_asset_url(value, host=host))

    identifier = _identifier_from_url(value, host=host)
    if identifier is None:
        raise InvalidAssetError(
            f"Not a GitHub attachment URL: {value}",
            hint=(
                f"Expected https://{host}/user-attachments/assets/<id> "
                f"or https://{host}/<owner>/<repo>/assets/<number>/<id>"
            ),
        )

    parts = urlsplit(value)
    return AssetReference(
        identifier=identifier,
        url=f"{parts.scheme}://{parts.netloc}{parts.path.rstrip('/')}",
    )


def _identifier_from_url(url: str, host: str) -> Optional[str]:
    """Return the asset identifier of an attachment URL, or None."""
    parts = urlsplit(url)
    if parts.scheme != "https" or (parts.hostname or "").lower() != host.lower():
        return None

    segments = [s for s in parts.path.split("/") if s]

    if len(segments) == 3 and segments[:2] == ["user-attachments", "assets"]:
        candidate = segments[2]
    elif len(segments) == 5 and segments[2] == "assets" and segments[3].isdigit():
        candidate = segments[4]
    else:
        return None

    return candidate if is_valid_asset_id(candidate) else None
