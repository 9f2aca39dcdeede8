"""Duration countdown engine for CountClock.

States
------
STOPPED   Waiting: fresh, paused part-way, or reset.
RUNNING   Frame callbacks are scheduled; one tick per elapsed second.

Ticks
-----
Each frame compares the clock against the timestamp of the last tick.
The first frame after ``start()`` only records that timestamp, so a
start immediately followed by a pause never costs a second.  Once more
than 1000 ms have passed, ``remaining`` drops by exactly one and the
window restarts from *now*.

The countdown does not stop at zero: it keeps going into overtime
(negative remaining) and latches ``is_negative`` until reset.
"""

from __future__ import annotations

import time
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..logger import setup_logger
from .scheduler import FrameScheduler
from .state import TimerState, DEFAULT_SECONDS

logger = setup_logger(__name__)

TICK_MS = 1000

# Preset buttons, in seconds
PRESETS: tuple[int, ...] = (3 * 60, 5 * 60, 7 * 60, 10 * 60)
TEST_PRESETS: tuple[int, ...] = (5, 65)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class CountdownEngine(QObject):
    """Qt-based countdown with frame-paced ticks and an overtime latch.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted whenever remaining changes (ticks, reset, new duration).
    running_changed(is_running: bool)
        Emitted on start / pause, and on reset of a running countdown.
    overtime_started()
        Emitted once, on the tick that takes remaining below zero.
    duration_changed(initial_seconds: int)
        Emitted after ``set_duration`` succeeds.
    """

    tick = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    overtime_started = pyqtSignal()
    duration_changed = pyqtSignal(int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        initial_seconds: int = DEFAULT_SECONDS,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        super().__init__(parent)
        self._state = TimerState(max(1, initial_seconds))
        self._clock = clock
        self._last_tick: float | None = None
        self._frames = FrameScheduler(self._on_frame, self)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        """Seconds left on the clock (negative in overtime)."""
        return self._state.remaining_seconds

    @property
    def initial(self) -> int:
        return self._state.initial_seconds

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_negative(self) -> bool:
        return self._state.is_negative

    @property
    def percent_elapsed(self) -> float:
        """0.0 → 1.0 progress through the countdown (1.0 in overtime)."""
        initial = self._state.initial_seconds
        if initial <= 0:
            return 1.0
        elapsed = initial - self._state.remaining_seconds
        return max(0.0, min(1.0, elapsed / initial))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin (or continue) counting down.  No-op when running."""
        if self._state.is_running:
            return
        self._state.is_running = True
        self._last_tick = None
        self._frames.schedule()
        logger.debug(f"Countdown started at {self._state.remaining_seconds}s")
        self.running_changed.emit(True)

    def pause(self) -> None:
        """Stop counting and drop the pending frame.  No-op when stopped."""
        if not self._state.is_running:
            return
        self._halt()
        logger.debug(f"Countdown paused at {self._state.remaining_seconds}s")
        self.running_changed.emit(False)

    stop = pause

    def toggle(self) -> None:
        if self._state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Full duration, stopped, overtime cleared."""
        was_running = self._state.is_running
        self._halt()
        self._state.reset()
        logger.debug(f"Countdown reset to {self._state.initial_seconds}s")
        self.tick.emit(self._state.remaining_seconds)
        if was_running:
            self.running_changed.emit(False)

    def set_duration(self, seconds: int) -> bool:
        """Choose a new duration.  Only allowed while stopped.

        Returns False (and changes nothing) while the countdown runs.
        """
        if self._state.is_running:
            return False
        self._state.initial_seconds = max(1, int(seconds))
        self._state.reset()
        self.duration_changed.emit(self._state.initial_seconds)
        self.tick.emit(self._state.remaining_seconds)
        return True

    def set_minutes(self, minutes: int) -> bool:
        return self.set_duration(minutes * 60)

    def shutdown(self) -> None:
        """Teardown: cancel any pending frame without emitting signals."""
        self._halt()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: frame loop
    # ══════════════════════════════════════════════════════════════════

    def _halt(self) -> None:
        self._frames.cancel()
        self._state.is_running = False
        self._last_tick = None

    def _on_frame(self) -> None:
        if not self._state.is_running:
            return

        now = self._clock()
        if self._last_tick is None:
            self._last_tick = now
        elif now - self._last_tick > TICK_MS:
            self._last_tick = now
            self._advance()

        # _advance emits; a slot may have paused us in the meantime
        if self._state.is_running:
            self._frames.schedule()

    def _advance(self) -> None:
        was_negative = self._state.is_negative
        self._state.remaining_seconds -= 1
        self.tick.emit(self._state.remaining_seconds)
        if self._state.is_negative and not was_negative:
            logger.info("Countdown went into overtime")
            self.overtime_started.emit()
