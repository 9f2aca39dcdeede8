"""Shared pytest fixtures for CountClock tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from countclock.database.db import configure_engine, init_db
from countclock.timer.engine import CountdownEngine
from countclock.timer.target import TargetCountdown

from helpers import FakeClock, FakeNow


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh 5-minute CountdownEngine driven by a fake millisecond clock."""
    eng = CountdownEngine(parent=None, clock=clock)
    yield eng
    eng.shutdown()


@pytest.fixture
def now():
    return FakeNow()


@pytest.fixture
def countdown(qapp, now):
    """Fresh TargetCountdown driven by a fake wall clock."""
    cd = TargetCountdown(parent=None, now=now)
    yield cd
    cd.shutdown()
