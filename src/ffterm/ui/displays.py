"""
Display Components for CLI

Progress bar handle over rich.progress.
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    Task,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressBar:
    """
    Single-task progress bar.

    Usable as a context manager, or via explicit start()/stop().
    """

    def __init__(
        self,
        label: str,
        total: Optional[float] = 100.0,
        console: Optional[Console] = None,
        transient: bool = False,
    ):
        self.console = console or Console()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=transient,
        )
        self._task_id = self._progress.add_task(label, total=total)
        self._started = False

    def __enter__(self) -> "ProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def task(self) -> Task:
        return self._progress.tasks[0]

    @property
    def completed(self) -> float:
        return self.task.completed

    @property
    def total(self) -> Optional[float]:
        return self.task.total

    @property
    def finished(self) -> bool:
        return self.task.finished

    def start(self) -> None:
        """Start rendering."""
        if not self._started:
            self._progress.start()
            self._started = True

    def advance(self, amount: float = 1) -> None:
        """Advance by ``amount`` units."""
        self._progress.advance(self._task_id, amount)

    def update(
        self,
        completed: Optional[float] = None,
        total: Optional[float] = None,
        description: Optional[str] = None,
    ) -> None:
        """
        Update task progress.

        Args:
            completed: Set completed amount
            total: Change the total
            description: Update description
        """
        kwargs = {}
        if completed is not None:
            kwargs["completed"] = completed
        if total is not None:
            kwargs["total"] = total
        if description is not None:
            kwargs["description"] = description

        self._progress.update(self._task_id, **kwargs)

    def complete(self) -> None:
        """Mark the task as complete."""
        if self.total is not None:
            self._progress.update(self._task_id, completed=self.total)

    def stop(self) -> None:
        """Stop rendering."""
        if self._started:
            self._progress.stop()
            self._started = False
