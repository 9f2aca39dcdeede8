"""One-frame-at-a-time callback chain for the countdown engines.

A browser would use ``requestAnimationFrame``; here a single-shot
precise ``QTimer`` plays the same role.  The owner re-schedules from
inside its callback, so there is never more than one callback pending
and cancelling is a synchronous ``QTimer.stop()``.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer, Qt

FRAME_INTERVAL_MS = 16  # ~60 fps


class FrameScheduler(QObject):
    """Schedules ``callback`` for the next frame, at most once."""

    def __init__(
        self,
        callback: Callable[[], None],
        parent: QObject | None = None,
        *,
        interval_ms: int = FRAME_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> None:
        if self._timer.isActive():
            return
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def _fire(self) -> None:
        self._callback()
