"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/CountClock/settings.json

Set ``COUNTCLOCK_HOME`` to keep settings and the database somewhere
else (tests, portable installs).

Usage::

    settings = load_settings()
    settings.default_seconds = 7 * 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .logger import setup_logger

logger = setup_logger(__name__)


def _app_support_dir() -> Path:
    override = os.environ.get("COUNTCLOCK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "CountClock"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

COLOR_MODES = ("gradient", "warning")
STORAGE_BACKENDS = ("database", "json", "memory")


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    default_seconds: int = 5 * 60
    color_mode: str = "gradient"           # gradient | warning
    show_test_presets: bool = False        # 5 s / 65 s buttons

    # ── storage ───────────────────────────────────────────────────────
    storage_backend: str = "database"      # database | json | memory

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 480
    window_height: int = 640
    always_on_top: bool = False


_OPTIONAL_INTS = ("window_x", "window_y")


def _has_valid_type(name: str, value) -> bool:
    if name in _OPTIONAL_INTS:
        return value is None or (isinstance(value, int) and not isinstance(value, bool))
    default = getattr(Settings, name)
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            for name, value in filtered.items():
                if not _has_valid_type(name, value):
                    logger.warning(f"Ignoring invalid setting {name}={value!r}")
                    setattr(settings, name, getattr(Settings, name))
            if settings.color_mode not in COLOR_MODES:
                settings.color_mode = Settings.color_mode
            if settings.storage_backend not in STORAGE_BACKENDS:
                settings.storage_backend = Settings.storage_backend
            return settings
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning(f"Ignoring unreadable settings file {SETTINGS_PATH}: {exc}")
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
