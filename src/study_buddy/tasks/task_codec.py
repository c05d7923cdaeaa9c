# src/study_buddy/tasks/task_codec.py

"""
Flat-text codec for the task list.

Format: one task per line, fields joined by "|":

    id|title|subject|date|isDone

- date is ISO yyyy-MM-dd
- isDone is "true" / "false"
- title/subject have newlines replaced with a space on encode

Decoding is lossy-tolerant: a line that cannot be parsed is dropped, the rest of
the blob survives. decode_tasks() never raises.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Task

logger = logging.getLogger(__name__)

FIELD_SEP = "|"
LINE_SEP = "\n"
FIELD_COUNT = 5

_INT_RE = re.compile(r"[+-]?\d+")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_NEWLINE_RE = re.compile(r"\r\n|[\r\n]")
_NEWLINE_CHAR_RE = re.compile(r"[\r\n]")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True, slots=True)
class ParseError:
    line_no: int
    reason: str
    line: str


@dataclass(frozen=True, slots=True)
class LineResult:
    """Outcome of decoding one line: exactly one of task / error is set."""

    task: Task | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.task is not None


def _clean_text(value: str) -> str:
    return _NEWLINE_CHAR_RE.sub(" ", value)


def encode_task(task: Task) -> str:
    return FIELD_SEP.join(
        (
            str(task.id),
            _clean_text(task.title),
            _clean_text(task.subject),
            task.date.isoformat(),
            "true" if task.is_done else "false",
        )
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return LINE_SEP.join(encode_task(t) for t in tasks)


def _parse_id(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"bad id {raw!r}")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"id out of range {raw!r}")
    return value


def _parse_date(raw: str) -> dt.date:
    if not _DATE_RE.fullmatch(raw):
        raise ValueError(f"bad date {raw!r}")
    return dt.date.fromisoformat(raw)


def _parse_bool(raw: str) -> bool:
    # Anything other than "true" (any case) reads as not done.
    return raw.lower() == "true"


def decode_line(line: str, line_no: int = 0) -> LineResult:
    parts = line.split(FIELD_SEP)
    if len(parts) < FIELD_COUNT:
        return LineResult(error=ParseError(line_no, f"expected {FIELD_COUNT} fields, got {len(parts)}", line))

    try:
        task = Task(
            id=_parse_id(parts[0]),
            title=parts[1],
            subject=parts[2],
            date=_parse_date(parts[3]),
            is_done=_parse_bool(parts[4]),
        )
    except Exception as e:
        return LineResult(error=ParseError(line_no, str(e) or type(e).__name__, line))
    return LineResult(task=task)


def decode_lines(raw: str | None) -> list[LineResult]:
    """Per-line results, including the failures. Blank input -> []."""
    if not raw or not raw.strip():
        return []
    return [decode_line(line, i) for i, line in enumerate(_NEWLINE_RE.split(raw), start=1)]


def decode_tasks(raw: str | None) -> list[Task]:
    out: list[Task] = []
    for res in decode_lines(raw):
        if res.task is not None:
            out.append(res.task)
        elif res.error is not None:
            logger.debug("Skipping task line %s: %s", res.error.line_no, res.error.reason)
    return out
