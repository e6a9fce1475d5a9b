"""
CLI Service Helpers
===================

CLI-specific utilities for working with services and the ServiceFactory.

This module provides convenience functions for CLI commands to:
1. Access a singleton ServiceFactory instance
2. Handle service result errors consistently
3. Reduce boilerplate in command implementations

Usage:
    from ghasset.cli.service_helpers import services, handle_result

    result = services.download.download(asset_id, destination)
    outcome = handle_result(result)  # Exits with error message if failed
"""

from typing import TYPE_CHECKING, TypeVar

import click

if TYPE_CHECKING:
    from ghasset.services import ServiceFactory
    from ghasset.services.base import ServiceResult
    from ghasset.services.config import ConfigService
    from ghasset.services.download import DownloadService

# Type variable for generic result handling
T = TypeVar("T")


# ============================================================================
# Singleton Factory Instance
# ============================================================================

_factory: "ServiceFactory | None" = None


def get_factory() -> "ServiceFactory":
    """
    Get the singleton ServiceFactory instance for CLI.

    This is lazily initialized on first access, after the root command has
    applied its options to the configuration. For testing, use set_factory()
    to inject a custom instance.

    Returns:
        ServiceFactory: The singleton factory instance
    """
    global _factory
    if _factory is None:
        from ghasset.services import ServiceFactory

        _factory = ServiceFactory()
    return _factory


def set_factory(factory: "ServiceFactory") -> None:
    """
    Set a custom ServiceFactory instance.

    Example:
        # In tests
        set_factory(ServiceFactory(credential_provider=StaticCredentialProvider("t")))
    """
    global _factory
    _factory = factory


class _ServiceAccessor:
    """Lazy accessor for services backed by the singleton factory."""

    @property
    def download(self) -> "DownloadService":
        """Get DownloadService instance."""
        return get_factory().download

    @property
    def config(self) -> "ConfigService":
        """Get ConfigService instance."""
        return get_factory().config_service


services = _ServiceAccessor()


# ============================================================================
# Result Handling Utilities
# ============================================================================


def handle_result(result: "ServiceResult[T]") -> T:
    """
    Handle a service result, exiting with error if failed.

    Args:
        result: Service result to handle

    Returns:
        The result data if successful

    Raises:
        SystemExit: If result indicates failure (exits with code 1)
    """
    if not result.success:
        exit_with_error(result.error or "Unknown error")
    return result.data


def exit_with_error(message: str, code: int = 1) -> None:
    """
    Print error message and exit.

    Args:
        message: Error message to display
        code: Exit code (default: 1)

    Raises:
        SystemExit: Always exits with specified code
    """
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


# ============================================================================
# Factory Reset (for testing)
# ============================================================================


def reset_factory() -> None:
    """
    Reset the singleton factory instance.

    This is primarily useful for testing to ensure a clean factory state.
    """
    global _factory
    if _factory is not None:
        _factory.close()
    _factory = None


__all__ = [
    "services",
    "get_factory",
    "set_factory",
    "handle_result",
    "exit_with_error",
    "reset_factory",
]
