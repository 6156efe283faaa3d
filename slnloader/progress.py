"""Progress reporting and cancellation for long-running loads."""

from __future__ import annotations

import threading
from typing import Callable

from slnloader.errors import LoadCancelled

ProgressCallback = Callable[[float, str], None]


class CancellationToken:
    """Thread-safe cancellation flag observed by the loader between phases."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise LoadCancelled("Solution load was cancelled")


class ProgressMonitor:
    """Reports fractional progress (0.0 - 1.0) and a task name.

    Sub-tasks own a slice of the parent's range; progress reported on a
    sub-task is scaled into that slice.
    """

    def __init__(
        self,
        callback: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self.callback = callback
        self.cancellation = cancellation or CancellationToken()
        self._progress = 0.0
        self._task_name = ""
        self._parent: ProgressMonitor | None = None
        self._base = 0.0
        self._work = 1.0

    @property
    def progress(self) -> float:
        return self._progress

    @progress.setter
    def progress(self, value: float) -> None:
        self._progress = min(max(value, 0.0), 1.0)
        if self._parent is not None:
            self._parent._report(self._base + self._work * self._progress)
        else:
            self._notify()

    @property
    def task_name(self) -> str:
        return self._task_name

    @task_name.setter
    def task_name(self, value: str) -> None:
        self._task_name = value
        self._notify()

    def _report(self, value: float) -> None:
        self.progress = value

    def _notify(self) -> None:
        root = self
        while root._parent is not None:
            root = root._parent
        if root.callback:
            root.callback(root._progress, self._task_name or root._task_name)

    def create_sub_task(self, work: float) -> ProgressMonitor:
        """Create a child monitor covering `work` of this monitor's range."""
        child = ProgressMonitor(cancellation=self.cancellation)
        child._parent = self
        child._base = self._progress
        child._work = work
        return child

    def __enter__(self) -> ProgressMonitor:
        return self

    def __exit__(self, *exc_info) -> None:
        if self._parent is not None and exc_info[0] is None:
            self._parent._report(self._base + self._work)
