"""
Custom Exception Classes for Asset Downloads

This module defines the error taxonomy used throughout gh-asset. Each
download step raises exactly one kind of error, and every error is terminal:
nothing is retried or recovered internally.

Each exception carries a stable ``code`` and the ``step`` of the download it
failed in, so views can report which stage broke without parsing messages.
"""

from typing import Optional


class GhAssetError(Exception):
    """
    Base class for all gh-asset errors.

    Attributes:
        message (str): Explanation of the error
        step (Optional[str]): The download step that failed
        hint (Optional[str]): Suggested fix shown to the user
    """

    code = "error"
    default_message = "The asset download failed."

    def __init__(
        self,
        message: Optional[str] = None,
        step: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Initialize the error.

        Args:
            message (Optional[str]): Custom error message
            step (Optional[str]): Name of the download step that failed
            hint (Optional[str]): Suggested fix shown to the user
        """
        self.message = message or self.default_message
        self.step = step
        self.hint = hint
        super().__init__(self.message)

    @property
    def label(self) -> str:
        """Name of the error category, e.g. ``AuthError``."""
        return type(self).__name__

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message

    def to_dict(self) -> dict:
        """Convert the error to a dictionary."""
        return {
            "error": self.label,
            "code": self.code,
            "step": self.step,
            "message": self.message,
            "hint": self.hint,
        }


class InvalidAssetError(GhAssetError):
    """
    Exception raised when the asset identifier or URL cannot be used.

    Raised while building the request, before any credential lookup or
    network traffic happens.
    """

    code = "invalid_asset"
    default_message = (
        "Invalid asset ID format. Expected format: xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
    )


class AuthError(GhAssetError):
    """
    Exception raised when no usable token can be obtained.

    Covers a missing ``gh`` executable, an unauthenticated GitHub CLI and an
    empty token.
    """

    code = "auth"
    default_message = "GitHub CLI authentication failed."


class TransferError(GhAssetError):
    """
    Exception raised when the HTTP transfer fails.

    Covers connection errors, timeouts, redirect loops and non-2xx responses.

    Attributes:
        status_code (Optional[int]): HTTP status of the failed response, if any
    """

    code = "transfer"
    default_message = "The HTTP request failed."

    def __init__(
        self,
        message: Optional[str] = None,
        step: Optional[str] = None,
        hint: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, step=step, hint=hint)
        self.status_code = status_code

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


class InvalidDestination(GhAssetError):
    """
    Exception raised when the destination argument cannot be written to.

    Raised for empty destinations, disallowed characters and protected
    system directories.
    """

    code = "invalid_destination"
    default_message = "Invalid destination path."


class WriteError(GhAssetError):
    """
    Exception raised when the downloaded bytes cannot be written to disk.

    This is the filesystem (I/O) failure category: permissions, a full disk,
    or a path component that is not a directory.
    """

    code = "io"
    default_message = "Failed to write the downloaded file."


__all__ = [
    "GhAssetError",
    "InvalidAssetError",
    "AuthError",
    "TransferError",
    "InvalidDestination",
    "WriteError",
]
