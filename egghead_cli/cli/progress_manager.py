"""
Renders the scheduler's progress callbacks with Rich progress bars.
"""

import asyncio
import logging

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from egghead_cli.core.download_manager import TransferOutcome
from egghead_cli.models.catalog import TransferTask
from egghead_cli.utils.formatting import format_size

log = logging.getLogger("egghead_cli")


class ProgressManager:
    """
    Live display with one counter bar for the enrichment stage and one
    byte bar for the lesson currently being transferred.
    """

    def __init__(self, console: Console):
        self.console = console

        self.overall_progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            console=console,
        )
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}", justify="left"),
            BarColumn(bar_width=20),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            DownloadColumn(),
            "•",
            TransferSpeedColumn(),
            "•",
            TimeRemainingColumn(),
            console=console,
            transient=True,
        )

        self._live: Live | None = None
        self._counter_task_id: TaskID | None = None
        self._transfer_task_id: TaskID | None = None
        self._current: TransferTask | None = None

    def _renderable(self) -> Table:
        grid = Table.grid()
        grid.add_row(self.overall_progress)
        grid.add_row(self.progress)
        return grid

    def start_counter(self, description: str, total: int) -> None:
        """Shows a counter bar, e.g. 'Retrieving lesson information'."""
        self._counter_task_id = self.overall_progress.add_task(description, total=total)

    def update_counter(self, completed: int, total: int) -> None:
        if self._counter_task_id is not None:
            self.overall_progress.update(
                self._counter_task_id, completed=completed, total=total
            )

    def finish_counter(self, message: str) -> None:
        if self._counter_task_id is not None:
            self.overall_progress.remove_task(self._counter_task_id)
            self._counter_task_id = None
        self.console.print(f"[green]✔[/green] {message}")

    def start_transfer(self, task: TransferTask) -> None:
        self._current = task
        description = (
            f"{task.position}/{task.total_count}: {escape(task.lesson.name)}"
        )
        if len(description) > 60:
            description = description[:57] + "..."
        self._transfer_task_id = self.progress.add_task(
            description, total=task.lesson.file_size
        )

    def update_transfer(self, downloaded: int, total: int | None) -> None:
        if self._transfer_task_id is not None:
            self.progress.update(
                self._transfer_task_id, completed=downloaded, total=total
            )

    def finish_transfer(self, task: TransferTask, outcome: TransferOutcome) -> None:
        if self._transfer_task_id is not None:
            self.progress.remove_task(self._transfer_task_id)
            self._transfer_task_id = None
        self._current = None

        label = f"{task.position}/{task.total_count}: {escape(task.lesson.name)}"
        if outcome is TransferOutcome.DOWNLOADED:
            self.console.print(
                f"[green]✔ Downloaded[/green] {label} "
                f"[dim]({format_size(task.lesson.file_size)})[/dim]"
            )
        elif outcome is TransferOutcome.SKIPPED:
            self.console.print(f"[yellow]○ Skipped[/yellow] {label} [dim](exists)[/dim]")
        else:
            self.console.print(f"[yellow]⚠ Unavailable[/yellow] {label}")

    def fail_current(self) -> None:
        """Marks the in-flight transfer as failed, if there is one."""
        if self._transfer_task_id is not None:
            self.progress.remove_task(self._transfer_task_id)
            self._transfer_task_id = None
        if self._current is not None:
            task = self._current
            self.console.print(
                f"[red]✗ Failed[/red] {task.position}/{task.total_count}: "
                f"{escape(task.lesson.name)}"
            )
            self._current = None

    async def __aenter__(self):
        self._live = Live(
            self._renderable(),
            console=self.console,
            refresh_per_second=8,
            transient=True,
        )
        self._live.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.fail_current()
        if self._live:
            await asyncio.sleep(0.1)
            self._live.stop()
