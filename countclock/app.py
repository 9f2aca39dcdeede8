"""Main application window: Timer and Event tabs, menus, shortcuts."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QTabWidget, QVBoxLayout, QWidget,
    QLineEdit, QDateTimeEdit, QStatusBar,
)

from .logger import setup_logger
from .settings import Settings, load_settings, save_settings
from .storage.backends import open_store
from .storage.targets import SavedTargetStore
from .timer.colors import ColorMode
from .timer.engine import CountdownEngine
from .timer.keys import handle_key
from .timer.target import TargetCountdown
from .ui.styles import build_stylesheet
from .ui.target_widget import TargetWidget
from .ui.timer_widget import TimerWidget

logger = setup_logger(__name__)


class CountClockApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Count Clock")
        self.setMinimumSize(420, 560)

        self._settings: Settings = settings or load_settings()
        self._persist_settings = persist_settings

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── engines & storage ─────────────────────────────────────────
        self._engine = CountdownEngine(
            self, initial_seconds=self._settings.default_seconds,
        )
        self._countdown = TargetCountdown(self)
        self._store = SavedTargetStore(open_store(self._settings.storage_backend))

        # ── widgets ───────────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet())

        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)

        self._tabs = QTabWidget(central)
        root_layout.addWidget(self._tabs)

        self._timer_widget = TimerWidget(
            self._engine,
            self._tabs,
            color_mode=ColorMode(self._settings.color_mode),
            show_test_presets=self._settings.show_test_presets,
        )
        self._tabs.addTab(self._timer_widget, "Timer")

        self._target_widget = TargetWidget(self._countdown, self._store, self._tabs)
        self._tabs.addTab(self._target_widget, "Event")

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Space: start/pause · 1-9: minutes")

        self._build_menu_bar()

        self._engine.overtime_started.connect(
            lambda: self._status_bar.showMessage("Over time!")
        )
        self._countdown.finished.connect(
            lambda: self._status_bar.showMessage("Event reached")
        )

        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> CountdownEngine:
        return self._engine

    @property
    def countdown(self) -> TargetCountdown:
        return self._countdown

    @property
    def store(self) -> SavedTargetStore:
        return self._store

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def target_widget(self) -> TargetWidget:
        return self._target_widget

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        view = self.menuBar().addMenu("View")

        mode_group = QActionGroup(self)
        mode_group.setExclusive(True)
        for mode, label in (
            (ColorMode.GRADIENT, "Colour Gradient"),
            (ColorMode.WARNING, "Last-Minute Warning"),
        ):
            action = QAction(label, self, checkable=True)
            action.setChecked(self._settings.color_mode == mode.value)
            action.triggered.connect(lambda _checked=False, m=mode: self._set_color_mode(m))
            mode_group.addAction(action)
            view.addAction(action)

        view.addSeparator()

        test_presets = QAction("Show Test Presets", self, checkable=True)
        test_presets.setChecked(self._settings.show_test_presets)
        test_presets.toggled.connect(self._set_test_presets)
        view.addAction(test_presets)

        on_top = QAction("Always on Top", self, checkable=True)
        on_top.setChecked(self._settings.always_on_top)
        on_top.toggled.connect(self._set_always_on_top)
        view.addAction(on_top)

    def _set_color_mode(self, mode: ColorMode) -> None:
        self._settings.color_mode = mode.value
        self._timer_widget.set_color_mode(mode)
        self._store_settings()

    def _set_test_presets(self, visible: bool) -> None:
        self._settings.show_test_presets = visible
        self._timer_widget.set_test_presets_visible(visible)
        self._store_settings()

    def _set_always_on_top(self, on_top: bool) -> None:
        self._settings.always_on_top = on_top
        self._apply_always_on_top(on_top)
        self._store_settings()

    def _apply_always_on_top(self, on_top: bool) -> None:
        was_visible = self.isVisible()
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, on_top)
        if was_visible:
            self.show()

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS / GEOMETRY
    # ══════════════════════════════════════════════════════════════════

    def _store_settings(self) -> None:
        if self._persist_settings:
            save_settings(self._settings)

    def _restore_geometry(self) -> None:
        s = self._settings
        self.resize(s.window_width, s.window_height)
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        self._store_settings()

    def _schedule_geometry_save(self) -> None:
        self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _typing(self) -> bool:
        focus = QApplication.focusWidget()
        return isinstance(focus, (QLineEdit, QDateTimeEdit))

    def handle_shortcut(self, key_text: str) -> bool:
        """Space / digit shortcuts for the Timer tab."""
        if self._tabs.currentWidget() is not self._timer_widget:
            return False
        if self._typing():
            return False
        return handle_key(self._engine, key_text)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if not event.modifiers() and self.handle_shortcut(event.text()):
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._geometry_save_timer.stop()
        self._save_geometry()
        self._engine.shutdown()
        self._countdown.shutdown()
        logger.debug("Window closed; timers cancelled")
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()
