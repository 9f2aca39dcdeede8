"""Tests for the Timer and Event cards and the main window wiring."""

from __future__ import annotations

import json
from datetime import timedelta, timezone

import pytest

from countclock.app import CountClockApp
from countclock.settings import Settings, load_settings
from countclock.storage.backends import MemoryStore
from countclock.storage.targets import SavedTargetStore
from countclock.timer.colors import GREEN, RED, NEUTRAL, ColorMode
from countclock.ui.target_widget import TargetWidget
from countclock.ui.timer_widget import TimerWidget

from helpers import run_seconds


# ═══════════════════════════════════════════════════════════════════════
#  TIMER CARD
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerWidget:

    def test_initial_display(self, engine):
        w = TimerWidget(engine)
        assert w.clock_text == "05:00"
        assert w.color.rgb == GREEN
        assert w._start_pause_btn.text() == "Start"

    def test_button_toggles_engine(self, engine):
        w = TimerWidget(engine)
        w._start_pause_btn.click()
        assert engine.is_running is True
        assert w._start_pause_btn.text() == "Pause"
        w._start_pause_btn.click()
        assert engine.is_running is False

    def test_presets_disabled_while_running(self, engine):
        w = TimerWidget(engine)
        engine.start()
        assert not w._preset_buttons[180].isEnabled()
        engine.pause()
        assert w._preset_buttons[180].isEnabled()

    def test_preset_sets_duration(self, engine):
        w = TimerWidget(engine)
        w._preset_buttons[420].click()
        assert engine.initial == 420
        assert w.clock_text == "07:00"
        assert w._preset_buttons[420].isChecked()
        assert not w._preset_buttons[300].isChecked()

    def test_test_presets_hidden_by_default(self, engine):
        w = TimerWidget(engine)
        assert w._test_row.isHidden()
        w.set_test_presets_visible(True)
        assert not w._test_row.isHidden()

    def test_test_preset_seconds(self, engine):
        w = TimerWidget(engine, show_test_presets=True)
        w._preset_buttons[65].click()
        assert w.clock_text == "01:05"

    def test_overtime_display(self, engine, clock):
        w = TimerWidget(engine)
        engine.set_duration(1)
        engine.start()
        run_seconds(engine, clock, 2)
        assert w.clock_text == "-00:01"
        assert not w._overtime_label.isHidden()
        assert w.color.rgb == RED

    def test_reset_button(self, engine, clock):
        w = TimerWidget(engine)
        engine.start()
        run_seconds(engine, clock, 3)
        w._reset_btn.click()
        assert w.clock_text == "05:00"
        assert engine.is_running is False

    def test_warning_mode(self, engine, clock):
        w = TimerWidget(engine, color_mode=ColorMode.WARNING)
        assert w.color.rgb == NEUTRAL
        engine.set_duration(61)
        engine.start()
        run_seconds(engine, clock, 1)
        assert w.color.rgb == RED

    def test_switch_color_mode(self, engine):
        w = TimerWidget(engine)
        w.set_color_mode(ColorMode.WARNING)
        assert w.color.rgb == NEUTRAL


# ═══════════════════════════════════════════════════════════════════════
#  EVENT CARD
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTargetWidget:

    @pytest.fixture
    def store(self):
        return SavedTargetStore(MemoryStore())

    def test_start_disabled_without_target(self, countdown, store):
        w = TargetWidget(countdown, store)
        assert not w._start_pause_btn.isEnabled()
        assert w.clock_text == "00:00"

    def test_save_and_list(self, countdown, store):
        w = TargetWidget(countdown, store)
        w._name_input.setText("Launch")
        saved = w.save_current()
        assert saved is not None
        assert store.load(saved.id).name == "Launch"
        assert w.saved_count == 1

    def test_save_needs_name(self, countdown, store):
        w = TargetWidget(countdown, store)
        assert w.save_current() is None
        assert not w._save_btn.isEnabled()

    def test_load_does_not_start(self, countdown, store, now):
        when = (now.value + timedelta(hours=2)).replace(microsecond=0)
        saved = store.save("Keynote", when.strftime("%Y-%m-%dT%H:%M"))
        w = TargetWidget(countdown, store)
        w._list.setCurrentRow(0)
        w.load_selected()
        assert countdown.name == "Keynote"
        assert countdown.remaining == 7200
        assert countdown.is_running is False
        assert w._start_pause_btn.isEnabled()
        assert w._name_input.text() == "Keynote"
        assert w.selected_id() == saved.id

    def test_load_utc_date(self, countdown, store, now):
        when = (now.value + timedelta(hours=1)).astimezone(timezone.utc)
        store.save("Call", when.strftime("%Y-%m-%dT%H:%M:%SZ"))
        w = TargetWidget(countdown, store)
        w._list.setCurrentRow(0)
        w.load_selected()
        assert countdown.remaining == 3600

    def test_delete_selected(self, countdown, store):
        store.save("A", "2026-12-31T23:59")
        w = TargetWidget(countdown, store)
        w._list.setCurrentRow(0)
        w.delete_selected()
        assert len(store) == 0
        assert w.saved_count == 0

    def test_apply_inputs_sets_target(self, countdown, store):
        w = TargetWidget(countdown, store)
        w._name_input.setText("Demo")
        w.apply_inputs()
        assert countdown.has_target
        assert countdown.name == "Demo"


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestMainWindow:

    @pytest.fixture
    def window(self):
        win = CountClockApp(
            Settings(storage_backend="memory"), persist_settings=False,
        )
        yield win
        win.close()

    def test_default_duration_from_settings(self, qapp):
        win = CountClockApp(
            Settings(default_seconds=180, storage_backend="memory"),
            persist_settings=False,
        )
        assert win.engine.initial == 180
        win.close()

    def test_mistyped_settings_file_still_starts(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "default_seconds": "300", "window_width": "wide",
            "storage_backend": "memory",
        }))
        monkeypatch.setattr("countclock.settings.SETTINGS_PATH", path)
        win = CountClockApp(load_settings(), persist_settings=False)
        assert win.engine.initial == 300
        assert win.width() >= 420
        win.close()

    def test_space_shortcut(self, window):
        assert window.handle_shortcut(" ") is True
        assert window.engine.is_running is True

    def test_digit_shortcut(self, window):
        window.handle_shortcut("2")
        assert window.engine.initial == 120

    def test_shortcuts_only_on_timer_tab(self, window):
        window._tabs.setCurrentWidget(window.target_widget)
        assert window.handle_shortcut(" ") is False
        assert window.engine.is_running is False

    def test_close_cancels_timers(self, window):
        window.show()
        window.engine.start()
        window.close()
        assert window.engine.is_running is False
        assert not window.engine._frames.is_pending
