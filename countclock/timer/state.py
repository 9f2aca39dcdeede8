"""Countdown state shared by the engine and the colour policy."""

from __future__ import annotations

from ..exceptions import TimerLockedError

DEFAULT_SECONDS = 5 * 60


class TimerState:
    """Remaining/initial seconds plus the running flag and overtime latch.

    ``is_negative`` latches the first time ``remaining_seconds`` drops
    below zero and stays set until :meth:`reset` (or a new duration) even
    if remaining is later pushed back up.  ``initial_seconds`` can only
    be changed while the countdown is stopped.
    """

    __slots__ = ("_initial", "_remaining", "_running", "_negative")

    def __init__(self, initial_seconds: int = DEFAULT_SECONDS) -> None:
        self._initial: int = int(initial_seconds)
        self._remaining: int = self._initial
        self._running: bool = False
        self._negative: bool = False

    def __repr__(self) -> str:
        return (
            f"<TimerState remaining={self._remaining} initial={self._initial} "
            f"running={self._running} negative={self._negative}>"
        )

    @property
    def initial_seconds(self) -> int:
        return self._initial

    @initial_seconds.setter
    def initial_seconds(self, value: int) -> None:
        if self._running:
            raise TimerLockedError("duration can only change while paused")
        self._initial = int(value)

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @remaining_seconds.setter
    def remaining_seconds(self, value: int) -> None:
        self._remaining = int(value)
        if self._remaining < 0:
            self._negative = True

    @property
    def is_running(self) -> bool:
        return self._running

    @is_running.setter
    def is_running(self, value: bool) -> None:
        self._running = bool(value)

    @property
    def is_negative(self) -> bool:
        return self._negative

    def reset(self) -> None:
        """Back to a full, stopped, non-overtime countdown."""
        self._running = False
        self._remaining = self._initial
        self._negative = False
