# src/study_buddy/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite preference store and the TaskStore into AppState.

The TaskStore is created here and nowhere else; everything else receives it
through AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.prefs_store import SqlitePreferenceStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.prefs_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    The returned store is not initialized yet: await state.task_store.initialize()
    on the loop that will own it.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    prefs = SqlitePreferenceStore(settings.prefs_db_path)
    state = AppState(
        settings=settings,
        prefs=prefs,
        task_store=TaskStore(prefs, key=settings.tasks_key),
    )
    logger.debug("AppState created db=%s key=%s", settings.prefs_db_path, settings.tasks_key)
    return state
