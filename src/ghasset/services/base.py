"""
Base class and utilities for all services.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from ghasset.repository.protocol import FileRepositoryProtocol

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service call.

    Commands never see exceptions from the services; they get a result that
    is either ``ok`` with data or ``fail`` with a one-line error. Metadata
    carries machine-readable details such as the failing step.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T = None, message: str = None, **metadata) -> "ServiceResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, message=message, metadata=metadata)

    @classmethod
    def fail(cls, error: str, **metadata) -> "ServiceResult[T]":
        """Create a failed result."""
        return cls(success=False, error=error, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        result = {
            "success": self.success,
            "message": self.message,
            "error": self.error,
            "data": data,
        }
        if self.metadata:
            result["metadata"] = self.metadata
        return result


@dataclass
class TransferProgress:
    """Progress information for a running download."""

    downloaded: int = 0
    total: int = 0

    @property
    def percent(self) -> float:
        """Get completion percentage (0 when the size is unknown)."""
        return (self.downloaded / self.total * 100) if self.total > 0 else 0

    @property
    def remaining(self) -> int:
        """Get remaining bytes (0 when the size is unknown)."""
        return max(self.total - self.downloaded, 0)


# Type alias for progress callback
ProgressCallback = Callable[[TransferProgress], None]


class BaseService:
    """
    Base class for all services.

    Provides common functionality for:
    - Dependency injection of the file repository
    - Progress reporting
    """

    def __init__(self, file_repository: Optional["FileRepositoryProtocol"] = None) -> None:
        """Initialize the service.

        Args:
            file_repository: Optional file repository for dependency injection.
                           Required for file-based services, not needed for in-memory services.
        """
        self.file_repository = file_repository
        self._progress_callback: Optional[ProgressCallback] = None

    def set_progress_callback(self, callback: Optional[ProgressCallback]) -> None:
        """Set a callback for progress updates."""
        self._progress_callback = callback

    def _report_progress(self, progress: TransferProgress) -> None:
        """Report progress if a callback is set."""
        if self._progress_callback:
            self._progress_callback(progress)
