# src/study_buddy/tasks/task_api.py

"""
High-level helpers used by the UI layer.

Validation of raw user input lives here, not in TaskStore: the store silently
ignores bad input, while the UI needs a message to show.
"""

from __future__ import annotations

import datetime as dt
import re

from ..core.errors import ValidationError
from .task_models import Task, TaskStats
from .task_store import TaskStore

EMPTY_FIELDS_MESSAGE = "Title and subject cannot be empty."
INVALID_DATE_MESSAGE = "Invalid date. Use format YYYY-MM-DD."

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_due_date(text: str | None, *, today: dt.date | None = None) -> dt.date:
    """Blank -> today; otherwise strict YYYY-MM-DD."""
    if text is None or not text.strip():
        return today or dt.date.today()

    raw = text.strip()
    if not _DATE_RE.fullmatch(raw):
        raise ValidationError(INVALID_DATE_MESSAGE)
    try:
        return dt.date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(INVALID_DATE_MESSAGE) from e


def submit_new_task(
    store: TaskStore,
    title: str,
    subject: str,
    due_text: str | None = None,
    *,
    today: dt.date | None = None,
) -> Task | None:
    """
    The "Save task" flow of the add screen.

    Raises ValidationError for blank fields or a bad date; the store is not
    touched in that case.
    """
    if not title.strip() or not subject.strip():
        raise ValidationError(EMPTY_FIELDS_MESSAGE)
    due = parse_due_date(due_text, today=today)
    return store.add_task(title, subject, due)


def format_task_line(task: Task) -> str:
    mark = "x" if task.is_done else " "
    return f"[{mark}] {task.title} ({task.subject}) due {task.date.isoformat()} #{task.id}"


def format_stats(stats: TaskStats) -> str:
    return (
        "Stats:\n"
        f"  Total tasks: {stats.total}\n"
        f"  Completed: {stats.done}\n"
        f"  Pending: {stats.pending}"
    )
