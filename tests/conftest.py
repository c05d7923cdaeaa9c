# tests/conftest.py

from __future__ import annotations

import datetime as dt
import itertools
from pathlib import Path
from types import SimpleNamespace

import pytest

from study_buddy.tasks.task_store import TaskStore

from .fakes import FakePrefs

TODAY = dt.date(2024, 1, 1)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="StudyBuddy Test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        prefs_db_path=tmp_path / "data" / "tasks_prefs.sqlite3",
        tasks_key="tasks_data",
    )


@pytest.fixture()
def prefs() -> FakePrefs:
    return FakePrefs()


@pytest.fixture()
def clock():
    """Deterministic clock, one second per call: ids 1700000000000, 1700000001000, ..."""
    ticks = itertools.count()
    return lambda: 1_700_000_000.0 + next(ticks)


@pytest.fixture()
def store(prefs: FakePrefs, clock) -> TaskStore:
    """Uninitialized store over the in-memory backend."""
    return TaskStore(prefs, clock=clock, today=lambda: TODAY)
