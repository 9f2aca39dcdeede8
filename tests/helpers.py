"""Shared test helpers for CountClock."""

from datetime import datetime, timedelta

from countclock.timer.engine import CountdownEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Monotonic millisecond clock that only moves when told to."""

    def __init__(self, start: float = 10_000.0):
        self.ms = start

    def __call__(self) -> float:
        return self.ms

    def advance(self, ms: float) -> None:
        self.ms += ms


class FakeNow:
    """Wall clock for the date countdown."""

    def __init__(self, start: datetime = datetime(2026, 10, 17, 12, 0, 0)):
        self.value = start

    def __call__(self) -> datetime:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += timedelta(seconds=seconds)


def run_seconds(engine: CountdownEngine, clock: FakeClock, seconds: int) -> None:
    """Drive the frame loop through *seconds* full ticks.

    The first frame after start() only records the reference time; each
    following frame more than 1000 ms later produces one tick.
    """
    if engine._last_tick is None:
        engine._on_frame()
    for _ in range(seconds):
        clock.advance(1001)
        engine._on_frame()
