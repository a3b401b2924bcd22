"""Progress reporting: wraps Rich or runs silently."""

from __future__ import annotations

import threading
from typing import Callable, Optional, TypeVar

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

# (files done, files total, path just completed)
ProgressCallback = Callable[[int, int, str], None]

T = TypeVar("T")


class ProgressCounter:
    """Counts completed files across worker threads.

    ``advance`` is the only point of contention between tasks; the callback
    runs under the same lock so observers see a monotonic sequence.
    """

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self.total = total
        self._callback = callback
        self._done = 0
        self._lock = threading.Lock()

    @property
    def done(self) -> int:
        with self._lock:
            return self._done

    def advance(self, path: str) -> int:
        with self._lock:
            self._done += 1
            if self._callback is not None:
                self._callback(self._done, self.total, path)
            return self._done


class ProgressReporter:
    """Rich progress bar wrapper."""

    def __init__(self, console: Console):
        self.console = console

    def run(
        self,
        description: str,
        callback: Callable[[Optional[ProgressCallback]], T],
    ) -> T:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task(description, total=None)

            def on_progress(done: int, total: int, path: str) -> None:
                progress.update(task, completed=done, total=total)

            return callback(on_progress)


class SilentReporter:
    """No-op reporter for tests and --quiet mode."""

    def run(
        self,
        description: str,
        callback: Callable[[Optional[ProgressCallback]], T],
    ) -> T:
        return callback(None)
