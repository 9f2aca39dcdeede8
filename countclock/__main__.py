"""Allow running CountClock as a module: python -m countclock."""

import argparse
import sys

from PyQt6.QtWidgets import QApplication

from .logger import set_log_level, setup_logger
from .settings import load_settings
from .timer.engine import PRESETS

logger = setup_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="countclock", description="Countdown / presentation timer.",
    )
    parser.add_argument(
        "--minutes", type=int, default=None,
        help="starting duration in minutes (default: from settings)",
    )
    parser.add_argument(
        "--test-presets", action="store_true",
        help="show the 5 s / 65 s test presets",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="DEBUG, INFO, WARNING or ERROR (default: from settings)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = load_settings()
    set_log_level(args.log_level or settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("CountClock")
    app.setOrganizationName("CountClock")

    from .app import CountClockApp

    window = CountClockApp(settings)
    if args.minutes is not None:
        window.engine.set_minutes(max(1, args.minutes))
    if args.test_presets:
        window.timer_widget.set_test_presets_visible(True)
    window.show()
    logger.info(
        f"Count Clock ready ({window.engine.initial}s; "
        f"presets {', '.join(str(p // 60) for p in PRESETS)} min)"
    )

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
