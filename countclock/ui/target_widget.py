"""Date countdown card (the Event tab).

Pick an event name and a date-time, count down to it, and keep named
targets around for later.  Saved targets are listed below the controls;
loading one fills in the inputs and points the countdown at it without
starting or stopping it.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from PyQt6.QtCore import Qt, QDate, QDateTime, QTime
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QLineEdit, QDateTimeEdit, QListWidget, QListWidgetItem,
)

from ..formatting import format_span
from ..storage.targets import SavedTarget, SavedTargetStore
from ..timer.target import TargetCountdown
from .styles import clock_style

_DISPLAY_FORMAT = "yyyy-MM-dd HH:mm"
_ISO_FORMAT = "yyyy-MM-dd'T'HH:mm"


def _to_qdatetime(value: datetime) -> QDateTime:
    return QDateTime(
        QDate(value.year, value.month, value.day),
        QTime(value.hour, value.minute, value.second),
    )


class TargetWidget(QWidget):
    """The date countdown card with its saved-target list."""

    def __init__(
        self,
        countdown: TargetCountdown,
        store: SavedTargetStore,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._countdown = countdown
        self._store = store
        self._build_ui()
        self._connect_signals()
        self._refresh_list()
        self._refresh_display(countdown.remaining)
        self._on_running_changed(countdown.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)

        self._event_label = QLabel("", card)
        self._event_label.setObjectName("eventLabel")
        self._event_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._event_label)

        self._clock_label = QLabel("", card)
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._clock_label.setStyleSheet(
            clock_style("#E2E2F0", "rgba(226, 226, 240, 0.7)")
        )
        layout.addWidget(self._clock_label)

        # ── inputs ───────────────────────────────────────────────────
        self._name_input = QLineEdit(card)
        self._name_input.setPlaceholderText("Event name")
        self._name_input.setMaxLength(100)
        layout.addWidget(self._name_input)

        self._date_input = QDateTimeEdit(card)
        self._date_input.setDisplayFormat(_DISPLAY_FORMAT)
        self._date_input.setCalendarPopup(True)
        default = (datetime.now() + timedelta(hours=1)).replace(second=0, microsecond=0)
        self._date_input.setDateTime(_to_qdatetime(default))
        layout.addWidget(self._date_input)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._apply_btn = QPushButton("Set", card)
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._save_btn = QPushButton("Save", card)

        btn_row.addWidget(self._apply_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._save_btn)
        layout.addLayout(btn_row)

        # ── saved targets ────────────────────────────────────────────
        self._list = QListWidget(card)
        layout.addWidget(self._list)

        list_row = QHBoxLayout()
        list_row.setSpacing(12)
        list_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._load_btn = QPushButton("Load", card)
        self._delete_btn = QPushButton("Delete", card)
        self._delete_btn.setObjectName("dangerButton")
        list_row.addWidget(self._load_btn)
        list_row.addWidget(self._delete_btn)
        layout.addLayout(list_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._apply_btn.clicked.connect(self.apply_inputs)
        self._start_pause_btn.clicked.connect(self._countdown.toggle)
        self._save_btn.clicked.connect(self.save_current)
        self._load_btn.clicked.connect(self.load_selected)
        self._delete_btn.clicked.connect(self.delete_selected)
        self._name_input.textChanged.connect(self._update_buttons)
        self._list.currentRowChanged.connect(self._update_buttons)
        self._list.itemDoubleClicked.connect(lambda _item: self.load_selected())

        self._countdown.tick.connect(self._refresh_display)
        self._countdown.running_changed.connect(self._on_running_changed)
        self._countdown.finished.connect(self._on_finished)

    # ── actions ───────────────────────────────────────────────────────────

    def _input_date(self) -> str:
        return self._date_input.dateTime().toString(_ISO_FORMAT)

    def apply_inputs(self) -> None:
        """Point the countdown at the name/date currently in the inputs."""
        self._countdown.set_target(
            self._input_date(), self._name_input.text().strip(),
        )
        self._refresh_display(self._countdown.remaining)

    def save_current(self) -> SavedTarget | None:
        name = self._name_input.text().strip()
        if not name:
            return None
        target = self._store.save(name, self._input_date())
        self._refresh_list()
        return target

    def selected_id(self) -> int | None:
        item = self._list.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def load_selected(self) -> None:
        target_id = self.selected_id()
        if target_id is None:
            return
        target = self._store.load(target_id)
        if target is None:
            return
        self._name_input.setText(target.name)
        when = target.target_time
        if when is not None:
            self._date_input.setDateTime(_to_qdatetime(when))
        self._countdown.set_target(target.date, target.name)
        self._refresh_display(self._countdown.remaining)

    def delete_selected(self) -> None:
        target_id = self.selected_id()
        if target_id is None:
            return
        self._store.delete(target_id)
        self._refresh_list()

    # ── display ───────────────────────────────────────────────────────────

    def _refresh_list(self) -> None:
        self._list.clear()
        for target in self._store:
            item = QListWidgetItem(f"{target.name}  ·  {target.date}")
            item.setData(Qt.ItemDataRole.UserRole, target.id)
            self._list.addItem(item)
        self._update_buttons()

    def _update_buttons(self, *_args) -> None:
        has_selection = self._list.currentItem() is not None
        self._load_btn.setEnabled(has_selection)
        self._delete_btn.setEnabled(has_selection)
        self._save_btn.setEnabled(bool(self._name_input.text().strip()))
        self._start_pause_btn.setEnabled(
            self._countdown.is_running or self._countdown.has_target
        )

    def _refresh_display(self, remaining: int) -> None:
        self._clock_label.setText(format_span(remaining))
        self._event_label.setText(self._countdown.name or "")
        self._update_buttons()

    def _on_running_changed(self, running: bool) -> None:
        self._start_pause_btn.setText("Pause" if running else "Start")
        self._update_buttons()

    def _on_finished(self) -> None:
        name = self._countdown.name
        self._event_label.setText(f"{name}: now!" if name else "Now!")

    @property
    def clock_text(self) -> str:
        return self._clock_label.text()

    @property
    def saved_count(self) -> int:
        return self._list.count()
