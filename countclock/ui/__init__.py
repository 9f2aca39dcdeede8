"""UI package."""

from .timer_widget import TimerWidget
from .target_widget import TargetWidget

__all__ = ["TimerWidget", "TargetWidget"]
