"""Exceptions raised by CountClock."""


class CountClockError(Exception):
    """Base exception for CountClock errors."""

    pass


class TimerLockedError(CountClockError):
    """The duration was changed while the countdown was running."""

    pass


class InvalidTargetError(CountClockError):
    """A saved target is missing its name or its date."""

    pass


class ConfigurationError(CountClockError):
    """A settings value names something that does not exist."""

    pass
