from __future__ import annotations

import itertools
from typing import Callable, Dict

from PySide6.QtCore import QObject, QTimer

from infrastructure.scheduling.scheduler import Scheduler


class QtScheduler(Scheduler):
    """Scheduler backed by single-shot QTimers on the GUI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._counter = itertools.count(1)
        self._timers: Dict[int, QTimer] = {}

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._counter)
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda h=handle: self._fire(h, callback))
        self._timers[handle] = timer
        timer.start(max(delay_ms, 0))
        return handle

    def cancel(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _fire(self, handle: int, callback: Callable[[], None]) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.deleteLater()
        callback()
