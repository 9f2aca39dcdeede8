"""Countdown to an absolute date-time (the "event" countdown).

Unlike :class:`~countclock.timer.engine.CountdownEngine` the remaining
time is not decremented tick by tick; every frame recomputes it from the
target and the wall clock, and a tick is emitted whenever the whole
number of seconds changes.  The countdown stops at zero.

A missing or unparsable target reads as zero and cannot be started.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..logger import setup_logger
from .scheduler import FrameScheduler

logger = setup_logger(__name__)


def parse_target(value: datetime | str | None) -> datetime | None:
    """Normalise a target to a naive local ``datetime`` (or None).

    Values carrying a UTC offset (``...+02:00``, ``...Z``) are converted to
    local time so they compare against ``datetime.now()``.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class TargetCountdown(QObject):
    """Qt-based countdown towards a fixed point in time.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted when the whole-second remaining value changes.
    running_changed(is_running: bool)
    finished()
        Emitted once when the target is reached while running.
    """

    tick = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    finished = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)
        self._now = now
        self._target: datetime | None = None
        self._remaining: int = 0
        self._running: bool = False
        self.name: str = ""
        self._frames = FrameScheduler(self._on_frame, self)

    # ── properties ────────────────────────────────────────────────────────

    @property
    def target(self) -> datetime | None:
        return self._target

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_target(self) -> bool:
        return self._target is not None

    # ── controls ──────────────────────────────────────────────────────────

    def set_target(self, value: datetime | str | None, name: str = "") -> None:
        """Point the countdown at *value*.

        Keeps the running flag as it was, except that an absent or
        invalid target halts the countdown and reads zero.
        """
        self._target = parse_target(value)
        self.name = name
        if self._target is None:
            if value not in (None, ""):
                logger.warning(f"Ignoring invalid countdown target {value!r}")
            self._set_remaining(0)
            self._stop()
            return
        self._set_remaining(self._compute_remaining())

    def start(self) -> None:
        if self._running or self._target is None:
            return
        remaining = self._compute_remaining()
        self._set_remaining(remaining)
        if remaining <= 0:
            return
        self._running = True
        self._frames.schedule()
        logger.debug(f"Target countdown started: {self.name or self._target}")
        self.running_changed.emit(True)

    def pause(self) -> None:
        self._stop()

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def shutdown(self) -> None:
        self._frames.cancel()
        self._running = False

    # ── internals ─────────────────────────────────────────────────────────

    def _compute_remaining(self) -> int:
        if self._target is None:
            return 0
        delta = (self._target - self._now()).total_seconds()
        return max(0, math.ceil(delta))

    def _set_remaining(self, value: int) -> None:
        if value != self._remaining:
            self._remaining = value
            self.tick.emit(value)

    def _stop(self) -> None:
        self._frames.cancel()
        if self._running:
            self._running = False
            self.running_changed.emit(False)

    def _on_frame(self) -> None:
        if not self._running:
            return
        self._set_remaining(self._compute_remaining())
        if self._remaining <= 0:
            logger.info(f"Target reached: {self.name or self._target}")
            self._stop()
            self.finished.emit()
            return
        if self._running:
            self._frames.schedule()
