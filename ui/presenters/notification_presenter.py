"""Notification channel - transient status messages (snackbar).

Only one message is visible at a time. A different message arriving
while one is visible closes it, waits a short settle delay and then shows
the newest pending request. A request identical to the visible one is
ignored so it is never interrupted by itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from config.constants import (
    NOTIFICATION_DURATION_MS,
    NOTIFICATION_SETTLE_MS,
    SEVERITIES,
    SEVERITY_INFO,
)
from infrastructure.scheduling.scheduler import Scheduler

Listener = Callable[[Optional["Notification"]], None]


@dataclass(frozen=True)
class Notification:
    message: str
    severity: str = SEVERITY_INFO


class NotificationChannel:
    """Single-slot queued notification display.

    Listeners receive the visible notification, or None when it closes.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        duration_ms: int = NOTIFICATION_DURATION_MS,
        settle_ms: int = NOTIFICATION_SETTLE_MS,
    ) -> None:
        """Initialize channel.

        Args:
            scheduler: Timer source for auto-dismiss and settle delay
            duration_ms: Time a notification stays visible
            settle_ms: Pause between closing one message and showing the next
        """
        self._scheduler = scheduler
        self._duration_ms = duration_ms
        self._settle_ms = settle_ms
        self._visible: Optional[Notification] = None
        self._queued: Optional[Notification] = None
        self._dismiss_timer: Optional[int] = None
        self._settle_timer: Optional[int] = None
        self._listeners: List[Listener] = []

    @property
    def visible(self) -> Optional[Notification]:
        return self._visible

    @property
    def queued(self) -> Optional[Notification]:
        return self._queued

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def show(self, message: str, severity: str = SEVERITY_INFO) -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {severity}")
        notification = Notification(message=message, severity=severity)

        if self._visible is not None:
            if notification == self._visible:
                return
            self._close()
            self._queue(notification)
        elif self._settle_timer is not None:
            # Waiting to show a queued message: newest request wins.
            self._queued = notification
        else:
            self._display(notification)

    def dismiss(self) -> None:
        """Close the visible notification before its timeout."""
        if self._visible is not None:
            self._close()

    def dispose(self) -> None:
        """Cancel pending timers and drop any queued message."""
        for handle in (self._dismiss_timer, self._settle_timer):
            if handle is not None:
                self._scheduler.cancel(handle)
        self._dismiss_timer = None
        self._settle_timer = None
        self._queued = None
        self._visible = None

    def _display(self, notification: Notification) -> None:
        self._visible = notification
        self._dismiss_timer = self._scheduler.call_later(self._duration_ms, self._on_timeout)
        logging.debug("notification %s: %s", notification.severity, notification.message)
        self._emit()

    def _close(self) -> None:
        if self._dismiss_timer is not None:
            self._scheduler.cancel(self._dismiss_timer)
            self._dismiss_timer = None
        self._visible = None
        self._emit()

    def _queue(self, notification: Notification) -> None:
        self._queued = notification
        if self._settle_timer is None:
            self._settle_timer = self._scheduler.call_later(self._settle_ms, self._on_settled)

    def _on_timeout(self) -> None:
        self._dismiss_timer = None
        if self._visible is not None:
            self._visible = None
            self._emit()

    def _on_settled(self) -> None:
        self._settle_timer = None
        queued, self._queued = self._queued, None
        if queued is not None:
            self._display(queued)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._visible)
