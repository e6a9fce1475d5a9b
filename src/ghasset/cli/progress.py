"""
This module provides Rich-based progress bars and console output utilities
for the gh-asset CLI.
"""

import sys
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table

if TYPE_CHECKING:
    from ghasset.services.base import TransferProgress

# Global console instance
console = Console()


class DownloadProgress:
    """
    Rich-based byte progress bar for a single download.

    The total is unknown until the first response headers arrive, so the
    bar starts indeterminate and picks up the size from the first update.

    Example:
        >>> with DownloadProgress(description="Downloading") as progress:
        ...     service.set_progress_callback(progress.update_from)
        ...     service.download(asset_id, destination)
    """

    def __init__(
        self,
        description: str = "Downloading",
        transient: bool = True,
        disable: bool = False,
    ) -> None:
        """
        Initialize the progress bar.

        Args:
            description: Description text shown before the bar
            transient: Remove progress bar when complete
            disable: Disable progress bar entirely
        """
        self.description = description
        self.transient = transient
        self.disable = disable
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def _create_progress(self) -> Progress:
        """Create the Rich Progress instance with byte-oriented columns."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=self.transient,
            disable=self.disable,
        )

    def __enter__(self) -> "DownloadProgress":
        """Enter the progress bar context."""
        self._progress = self._create_progress()
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=None)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the progress bar context."""
        if self._progress:
            self._progress.stop()

    def update(self, downloaded: int, total: int = 0) -> None:
        """Set the number of bytes received so far."""
        if self._progress and self._task_id is not None:
            self._progress.update(
                self._task_id,
                completed=downloaded,
                total=total if total > 0 else None,
            )

    def update_from(self, progress: "TransferProgress") -> None:
        """Progress callback accepted by DownloadService."""
        self.update(progress.downloaded, progress.total)


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True, highlight=False)


def print_table(
    title: str,
    columns: list,
    rows: list,
    show_header: bool = True,
) -> None:
    """
    Print a formatted table.

    Args:
        title: Table title
        columns: List of column names
        rows: List of row data (each row is a list of values)
        show_header: Whether to show column headers
    """
    table = Table(title=title, show_header=show_header)

    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*[str(v) for v in row])

    console.print(table)


def is_terminal() -> bool:
    """Check if we're running in a terminal (TTY)."""
    return sys.stdout.isatty()
