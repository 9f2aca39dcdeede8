"""Timer package."""

from .state import TimerState, DEFAULT_SECONDS
from .scheduler import FrameScheduler
from .engine import CountdownEngine, PRESETS, TEST_PRESETS
from .target import TargetCountdown, parse_target
from .colors import (
    ColorMode,
    ColorSample,
    Phase,
    color_for,
    display_color,
    gradient_color,
    is_warning,
)
from .keys import handle_key

__all__ = [
    "TimerState",
    "DEFAULT_SECONDS",
    "FrameScheduler",
    "CountdownEngine",
    "PRESETS",
    "TEST_PRESETS",
    "TargetCountdown",
    "parse_target",
    "ColorMode",
    "ColorSample",
    "Phase",
    "color_for",
    "display_color",
    "gradient_color",
    "is_warning",
    "handle_key",
]
