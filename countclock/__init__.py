"""CountClock: a countdown / presentation timer."""

__version__ = "0.1.0"
