# src/study_buddy/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from .ports import PreferenceBackend


@dataclass
class AppState:
    """Everything connectors need, built once by cli.bootstrap."""

    settings: object
    prefs: PreferenceBackend
    task_store: TaskStore
