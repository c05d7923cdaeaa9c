# src/study_buddy/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol

from ..tasks.task_models import Task

TaskListListener = Callable[[list[Task]], None]
# Receives the full task list after every change.


class PreferenceBackend(Protocol):
    """
    Durable key-value slot storage, scoped to the application.

    get() returns None for a missing key.
    set() raises on failure; the caller decides how loud that is.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
