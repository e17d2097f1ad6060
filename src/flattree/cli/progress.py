"""
Progress Display Utility Module

This module wraps Rich's progress bar behind a small interface used while
files are being moved. Progress can be disabled for quiet runs, JSON output
and verbose runs that print every move.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable
from typing import Any, TypeVar

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

T = TypeVar("T")


class ProgressManager:
    """
    A wrapper around Rich's Progress class for the flattree CLI.

    When disabled, ``track`` yields the items untouched and nothing is drawn.
    """

    def __init__(self, *, disabled: bool = False, console: Console | None = None) -> None:
        """
        Initialize the ProgressManager.

        Args:
            disabled: If True, progress display will be disabled
            console: Console to draw on; Rich's default console when None
        """
        self.disabled = disabled

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
            disable=disabled,
            transient=True,
        )

    def track(
        self,
        sequence: Iterable[T],
        description: str = "Processing...",
    ) -> Generator[T, None, None]:
        """
        Track progress over a finite sequence.

        Args:
            sequence: The iterable to track progress over
            description: Description text to display with the progress bar

        Yields:
            Items from the input sequence

        Example:
            >>> progress = ProgressManager()
            >>> for item in progress.track(candidates, "Flattening..."):
            ...     move(item)
        """
        if self.disabled:
            yield from sequence
            return

        total: Any = len(sequence) if hasattr(sequence, "__len__") else None  # type: ignore[arg-type]
        task_id = self._progress.add_task(description, total=total)

        try:
            with self._progress:
                for item in sequence:
                    yield item
                    self._progress.advance(task_id)
        finally:
            self._progress.remove_task(task_id)


def create_progress_manager(
    *,
    disabled: bool = False,
    console: Console | None = None,
) -> ProgressManager:
    """
    Factory function to create a ProgressManager instance.

    Args:
        disabled: Whether to disable progress display
        console: Console to draw on

    Returns:
        A configured ProgressManager
    """
    return ProgressManager(disabled=disabled, console=console)
