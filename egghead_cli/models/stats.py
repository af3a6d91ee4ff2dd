"""
Dataclass for tracking download session statistics.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DownloadStats:
    """Tracks the outcome of every task in a transfer pass."""

    lessons_downloaded: int = 0
    lessons_skipped_exists: int = 0
    lessons_unavailable: int = 0
    lessons_failed: int = 0
    total_size_downloaded: int = 0
    courses_processed: set[str] = field(default_factory=set)
    finished: bool = False

    _start_time: float = field(default_factory=time.monotonic, repr=False)
    _end_time: Optional[float] = field(default=None, repr=False)

    def start(self) -> None:
        """Restarts the clock at the beginning of a transfer pass."""
        self._start_time = time.monotonic()
        self._end_time = None
        self.finished = False

    def stop(self, finished: bool) -> None:
        """Freezes the clock; finished is False if the pass ended early."""
        self._end_time = time.monotonic()
        self.finished = finished

    @property
    def lessons_processed(self) -> int:
        """Number of tasks that reached a final outcome."""
        return (
            self.lessons_downloaded
            + self.lessons_skipped_exists
            + self.lessons_unavailable
            + self.lessons_failed
        )

    @property
    def elapsed_seconds(self) -> float:
        end = self._end_time if self._end_time is not None else time.monotonic()
        return end - self._start_time

    @property
    def average_speed_bps(self) -> float:
        """Average transfer speed over the whole pass, in bytes per second."""
        elapsed = self.elapsed_seconds
        if elapsed <= 0:
            return 0.0
        return self.total_size_downloaded / elapsed
