"""Duration countdown card (the Timer tab).

Layout (top → bottom):
    - Big MM:SS clock, coloured by the active colour mode
    - Overtime notice (only once the clock has gone negative)
    - Start/Pause + Reset
    - Preset row (3 / 5 / 7 / 10 min), test presets (5 s / 65 s) optional
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame,
)

from ..formatting import format_clock
from ..timer.colors import ColorMode, ColorSample, display_color
from ..timer.engine import CountdownEngine, PRESETS, TEST_PRESETS
from .styles import clock_style


def _preset_text(seconds: int) -> str:
    if seconds % 60 == 0:
        return f"{seconds // 60} min"
    return f"{seconds}s"


class TimerWidget(QWidget):
    """The duration countdown card."""

    def __init__(
        self,
        engine: CountdownEngine,
        parent: QWidget | None = None,
        *,
        color_mode: ColorMode = ColorMode.GRADIENT,
        show_test_presets: bool = False,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._color_mode = color_mode
        self._color: ColorSample | None = None
        self._preset_buttons: dict[int, QPushButton] = {}
        self._build_ui(show_test_presets)
        self._connect_signals()
        self._refresh_display(engine.remaining)
        self._on_running_changed(engine.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self, show_test_presets: bool) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._clock_label = QLabel("", card)
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        self._overtime_label = QLabel("OVERTIME", card)
        self._overtime_label.setObjectName("overtimeLabel")
        self._overtime_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._overtime_label.setVisible(False)
        layout.addWidget(self._overtime_label)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        # ── presets ──────────────────────────────────────────────────
        layout.addLayout(self._build_preset_row(card, PRESETS))
        self._test_row = QWidget(card)
        test_layout = self._build_preset_row(self._test_row, TEST_PRESETS)
        test_layout.setContentsMargins(0, 0, 0, 0)
        self._test_row.setLayout(test_layout)
        self._test_row.setVisible(show_test_presets)
        layout.addWidget(self._test_row)

    def _build_preset_row(self, parent: QWidget, presets: tuple[int, ...]) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setSpacing(8)
        row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        for seconds in presets:
            btn = QPushButton(_preset_text(seconds), parent)
            btn.setObjectName("presetButton")
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked=False, s=seconds: self._engine.set_duration(s))
            self._preset_buttons[seconds] = btn
            row.addWidget(btn)
        return row

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._refresh_display)
        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.duration_changed.connect(self._on_duration_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_running_changed(self, running: bool) -> None:
        self._start_pause_btn.setText("Pause" if running else "Start")
        # Durations can only change while stopped
        for btn in self._preset_buttons.values():
            btn.setEnabled(not running)
        self._on_duration_changed(self._engine.initial)

    def _on_duration_changed(self, initial: int) -> None:
        for seconds, btn in self._preset_buttons.items():
            btn.setChecked(seconds == initial)

    def _refresh_display(self, remaining: int) -> None:
        self._clock_label.setText(format_clock(remaining))
        self._overtime_label.setVisible(self._engine.is_negative)

        color = display_color(
            self._color_mode,
            remaining,
            self._engine.initial,
            self._engine.is_negative,
        )
        if color != self._color:
            self._color = color
            self._clock_label.setStyleSheet(clock_style(color.hex, color.glow))

    # ── options ───────────────────────────────────────────────────────────

    @property
    def color(self) -> ColorSample | None:
        return self._color

    @property
    def clock_text(self) -> str:
        return self._clock_label.text()

    def set_color_mode(self, mode: ColorMode) -> None:
        self._color_mode = mode
        self._color = None
        self._refresh_display(self._engine.remaining)

    def set_test_presets_visible(self, visible: bool) -> None:
        self._test_row.setVisible(visible)
