"""Clock-face formatting for remaining seconds."""

from __future__ import annotations


def format_clock(seconds: int) -> str:
    """``MM:SS`` with both fields zero-padded to two digits.

    Minutes are not wrapped into hours (6000 → ``100:00``).  Negative
    values are the overtime display: ``-MM:SS`` of the absolute value.
    """
    sign = "-" if seconds < 0 else ""
    minutes, secs = divmod(abs(seconds), 60)
    return f"{sign}{minutes:02d}:{secs:02d}"


def format_span(seconds: int) -> str:
    """Longer-range display used by the date countdown.

    ``Dd HH:MM:SS`` from one day up, ``HH:MM:SS`` from one hour up,
    otherwise the plain clock face.
    """
    if seconds < 3600:
        return format_clock(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    if days:
        return f"{days}d {hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
