# tests/test_prefs_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from study_buddy.core.errors import PersistenceFailure
from study_buddy.storage.prefs_store import SqlitePreferenceStore


def test_get_missing_key_returns_none(tmp_path: Path) -> None:
    prefs = SqlitePreferenceStore(tmp_path / "nested" / "prefs.sqlite3")

    assert prefs.get("tasks_data") is None
    assert prefs.db_path.exists()


def test_set_overwrites_and_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "prefs.sqlite3"
    prefs = SqlitePreferenceStore(db)

    prefs.set("tasks_data", "1|A|Math|2024-01-01|false")
    prefs.set("tasks_data", "1|A|Math|2024-01-01|true\n2|B|Art|2024-01-02|false")
    prefs.set("other", "")

    reopened = SqlitePreferenceStore(db)
    assert reopened.get("tasks_data") == "1|A|Math|2024-01-01|true\n2|B|Art|2024-01-02|false"
    assert reopened.get("other") == ""

    conn = sqlite3.connect(str(db))
    try:
        (n,) = conn.execute("SELECT COUNT(*) FROM prefs").fetchone()
    finally:
        conn.close()
    assert n == 2


def test_broken_database_raises_persistence_failure(tmp_path: Path) -> None:
    db = tmp_path / "prefs.sqlite3"
    prefs = SqlitePreferenceStore(db)

    conn = sqlite3.connect(str(db))
    try:
        conn.execute("DROP TABLE prefs")
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(PersistenceFailure) as read_err:
        prefs.get("tasks_data")
    assert read_err.value.key == "tasks_data"

    with pytest.raises(PersistenceFailure):
        prefs.set("tasks_data", "")
