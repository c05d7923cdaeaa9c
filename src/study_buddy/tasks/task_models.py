# src/study_buddy/tasks/task_models.py

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True, slots=True)
class Task:
    """
    Single study task in the planner.

    Notes:
    - id comes from the wall-clock timestamp (ms) at creation; two adds within the
      same millisecond can collide. Sample tasks use ids 1 and 2.
    - the only mutation is flipping is_done (via dataclasses.replace).
    """

    id: int
    title: str
    subject: str
    date: dt.date
    is_done: bool = False


class TaskStats(NamedTuple):
    total: int
    done: int
    pending: int
