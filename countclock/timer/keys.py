"""Keyboard shortcuts for the duration countdown.

Space toggles start/pause; the digits 1-9 pick that many minutes, but
only while the countdown is stopped.
"""

from __future__ import annotations

from .engine import CountdownEngine


def handle_key(engine: CountdownEngine, key_text: str) -> bool:
    """Apply the shortcut for *key_text*.  Returns True if it was ours."""
    if key_text == " ":
        engine.toggle()
        return True
    if len(key_text) == 1 and key_text in "123456789":
        if not engine.is_running:
            engine.set_minutes(int(key_text))
        return True
    return False
