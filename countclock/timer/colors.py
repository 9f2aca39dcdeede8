"""Display colours derived from the countdown.

Two policies exist:

gradient
    Solid green for the first few seconds, a red ⇄ orange ⇄ yellow sweep
    across the *gradient window*, solid red for the last ten seconds and
    in overtime.
warning
    A single "warning" flag during the final minute; no interpolation.

Everything here is a pure function of ``(remaining, initial,
is_negative)``; nothing is stored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

RGB = tuple[int, int, int]

GREEN: RGB = (0, 200, 83)
YELLOW: RGB = (255, 255, 0)
ORANGE: RGB = (255, 197, 0)   # halfway between yellow and (255, 140, 0)
RED: RGB = (255, 0, 0)
NEUTRAL: RGB = (226, 226, 240)

# Gradient stops, yellow end first
GRADIENT_STOPS: tuple[RGB, ...] = (YELLOW, ORANGE, RED)

SAFE_SECONDS = 5       # solid green at the start
DANGER_SECONDS = 10    # solid red at the end
WARNING_SECONDS = 60   # warning mode threshold
GLOW_ALPHA = 0.7


class Phase(Enum):
    SAFE = "safe"
    GRADIENT = "gradient"
    DANGER = "danger"


class ColorMode(Enum):
    GRADIENT = "gradient"
    WARNING = "warning"


@dataclass(frozen=True)
class ColorSample:
    """An RGB triple with the two renderings the UI needs."""

    r: int
    g: int
    b: int

    @classmethod
    def of(cls, rgb: RGB) -> ColorSample:
        return cls(*rgb)

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def glow(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {GLOW_ALPHA})"


# ── gradient mapper ─────────────────────────────────────────────────────────


def _lerp(c1: RGB, c2: RGB, t: float) -> RGB:
    """Linearly interpolate between two RGB triples (truncating)."""
    return (
        int(c1[0] + (c2[0] - c1[0]) * t),
        int(c1[1] + (c2[1] - c1[1]) * t),
        int(c1[2] + (c2[2] - c1[2]) * t),
    )


def gradient_color(percent: float) -> RGB:
    """Map *percent* onto the yellow → orange → red stops.

    ``percent >= 1`` is pure yellow, ``percent <= 0`` pure red.  In
    between, ``percent * 2`` picks a segment counted from the red end
    (0: red → orange, 1: orange → yellow) and its fractional part is
    the position inside that segment.
    """
    if percent >= 1:
        return YELLOW
    if percent <= 0:
        return RED
    stops = GRADIENT_STOPS[::-1]
    scaled = percent * 2
    index = math.floor(scaled)
    frac = scaled - index
    return _lerp(stops[index], stops[index + 1], frac)


# ── phase policy ────────────────────────────────────────────────────────────


def phase_for(remaining: int, initial: int, is_negative: bool) -> Phase:
    if is_negative or remaining <= DANGER_SECONDS:
        return Phase.DANGER
    if remaining > initial - SAFE_SECONDS:
        return Phase.SAFE
    return Phase.GRADIENT


def gradient_percent(remaining: int, initial: int) -> float | None:
    """Position inside the gradient window, clamped to 0..1.

    Returns None when the duration is too short to have a window at all
    (``initial <= 14``); callers render that as solid red.
    """
    span = initial - 14
    if span <= 0:
        return None
    percent = (initial - 5 - remaining + 1) / span
    return max(0.0, min(1.0, percent))


def color_for(remaining: int, initial: int, is_negative: bool) -> ColorSample:
    """Gradient-mode colour for the current countdown position."""
    phase = phase_for(remaining, initial, is_negative)
    if phase is Phase.DANGER:
        return ColorSample.of(RED)
    if phase is Phase.SAFE:
        return ColorSample.of(GREEN)
    percent = gradient_percent(remaining, initial)
    if percent is None:
        return ColorSample.of(RED)
    return ColorSample.of(gradient_color(percent))


# ── warning policy ──────────────────────────────────────────────────────────


def is_warning(remaining: int) -> bool:
    return 0 < remaining <= WARNING_SECONDS


def display_color(
    mode: ColorMode, remaining: int, initial: int, is_negative: bool,
) -> ColorSample:
    """Colour for whichever policy the user picked."""
    if mode is ColorMode.GRADIENT:
        return color_for(remaining, initial, is_negative)
    if is_negative or is_warning(remaining):
        return ColorSample.of(RED)
    return ColorSample.of(NEUTRAL)
