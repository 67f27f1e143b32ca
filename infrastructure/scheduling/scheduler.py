"""Fire-once timer abstraction.

The notification channel needs two kinds of timers (auto-dismiss and the
settle delay between two messages). Presenters depend on this interface
only; the Qt shell plugs in a QTimer-backed implementation and tests use
the manual clock.
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Tuple


class Scheduler(ABC):
    """Abstract fire-once timer interface."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Schedule ``callback`` after ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds
            callback: Zero-argument callable

        Returns:
            Timer handle usable with :meth:`cancel`
        """

    @abstractmethod
    def cancel(self, handle: int) -> None:
        """Cancel a pending timer. Unknown or fired handles are ignored.

        Args:
            handle: Handle returned by :meth:`call_later`
        """


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by :meth:`advance`.

    Useful for testing and for headless use of the presenters.
    """

    def __init__(self) -> None:
        self._now = 0
        self._counter = itertools.count(1)
        self._queue: List[Tuple[int, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}

    @property
    def now(self) -> int:
        """Elapsed virtual time in milliseconds."""
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._counter)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (self._now + max(delay_ms, 0), handle))
        return handle

    def cancel(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return len(self._callbacks)

    def advance(self, delay_ms: int) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self._now + delay_ms
        while self._queue and self._queue[0][0] <= target:
            due, handle = heapq.heappop(self._queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            self._now = due
            callback()
        self._now = target
