# src/study_buddy/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import datetime as dt
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..core.errors import PersistenceFailure
from ..core.ports import PreferenceBackend, TaskListListener
from .task_codec import decode_tasks, encode_tasks
from .task_models import Task, TaskStats

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "tasks_data"


def default_sample_tasks(today: dt.date) -> list[Task]:
    """Sample content so the home screen is not empty on first launch."""
    return [
        Task(id=1, title="Math revision", subject="Math", date=today),
        Task(id=2, title="Read chapter 3", subject="Physics", date=today + dt.timedelta(days=1)),
    ]


def calculate_task_stats(tasks: Iterable[Task]) -> TaskStats:
    items = list(tasks)
    total = len(items)
    done = sum(1 for t in items if t.is_done)
    return TaskStats(total=total, done=done, pending=total - done)


class TaskStore:
    """
    In-memory task list kept in sync with one durable key-value slot.

    Lifecycle:
    - construct once at the composition root
    - await initialize() before handing the store to any UI
    - await close() on shutdown (flushes pending writes)

    Concurrency:
    - mutations must run on the event loop thread (single owner)
    - every mutation publishes the full list to listeners synchronously,
      then enqueues the encoded snapshot for a single writer task
    - the writer applies snapshots in order, so an older write never lands
      after a newer one
    """

    def __init__(
        self,
        backend: PreferenceBackend,
        *,
        key: str = DEFAULT_TASKS_KEY,
        clock: Callable[[], float] = time.time,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._backend = backend
        self._key = key
        self._clock = clock
        self._today = today

        self._tasks: tuple[Task, ...] = ()
        self._listeners: list[TaskListListener] = []

        self._initialized = False
        self._init_task: asyncio.Task[None] | None = None

        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._writer: asyncio.Task[None] | None = None
        self._last_error: PersistenceFailure | None = None

    # ---- observable state ----

    @property
    def key(self) -> str:
        return self._key

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def last_persist_error(self) -> PersistenceFailure | None:
        return self._last_error

    def subscribe(self, listener: TaskListListener) -> Callable[[], None]:
        """
        Register a listener for list changes. Returns an unsubscribe callable.

        If the store is already initialized, the listener gets the current list
        right away.
        """
        self._listeners.append(listener)
        if self._initialized:
            self._notify(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, listener: TaskListListener) -> None:
        try:
            listener(list(self._tasks))
        except Exception:
            logger.exception("Task list listener failed: %r", listener)

    def _publish(self) -> None:
        for listener in list(self._listeners):
            self._notify(listener)

    # ---- initialization ----

    async def initialize(self) -> None:
        """
        Read the durable slot once and load it.

        Concurrent callers share the same read. An empty (or unreadable) slot
        seeds the sample list.
        """
        if self._initialized:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._load())
        await asyncio.shield(self._init_task)

    async def _load(self) -> None:
        read_ok = True
        try:
            raw = await asyncio.to_thread(self._backend.get, self._key)
        except Exception:
            logger.exception("Failed to read tasks from key=%s; starting from sample.", self._key)
            raw = None
            read_ok = False

        stored = decode_tasks(raw)
        if stored:
            self._tasks = tuple(stored)
            self._initialized = True
            logger.info("TaskStore ready key=%s total=%s", self._key, len(stored))
            self._publish()
            return

        self._tasks = tuple(default_sample_tasks(self._today()))
        self._initialized = True
        logger.info("TaskStore ready key=%s (seeded %s sample tasks)", self._key, len(self._tasks))
        self._publish()
        # Do not overwrite a slot we could not read: it may still hold real data.
        if read_ok:
            self._enqueue()

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("TaskStore is not initialized; await initialize() first")

    # ---- mutations ----

    def add_task(self, title: str, subject: str, date: dt.date) -> Task | None:
        """
        Append a new task. Blank title/subject -> silent no-op (returns None).
        """
        self._require_initialized()
        if not title or not title.strip() or not subject or not subject.strip():
            logger.debug("add_task ignored: blank title or subject")
            return None

        task = Task(
            id=int(self._clock() * 1000),
            title=title.strip(),
            subject=subject.strip(),
            date=date,
        )
        self._update((*self._tasks, task))
        logger.debug("Task added id=%s subject=%s date=%s", task.id, task.subject, task.date)
        return task

    def toggle_done(self, task_id: int) -> None:
        """Flip is_done for the task with task_id. Unknown id: list unchanged, still republished."""
        self._require_initialized()
        updated = tuple(replace(t, is_done=not t.is_done) if t.id == task_id else t for t in self._tasks)
        self._update(updated)
        logger.debug("Task toggled id=%s", task_id)

    def clear_all(self) -> None:
        self._require_initialized()
        self._update(())
        logger.debug("All tasks cleared")

    def _update(self, new_tasks: tuple[Task, ...]) -> None:
        self._tasks = new_tasks
        self._publish()
        self._enqueue()

    # ---- persistence ----

    def _enqueue(self) -> None:
        self._queue.put_nowait(encode_tasks(self._tasks))
        if self._writer is None or self._writer.done():
            self._writer = asyncio.get_running_loop().create_task(self._run_writer(), name="task-store-writer")

    async def _run_writer(self) -> None:
        while True:
            blob = await self._queue.get()
            try:
                await asyncio.to_thread(self._backend.set, self._key, blob)
            except Exception as e:
                logger.exception("Failed to persist tasks key=%s", self._key)
                failure = PersistenceFailure(f"Failed to persist tasks under key={self._key!r}", key=self._key)
                failure.__cause__ = e
                self._last_error = failure
            finally:
                self._queue.task_done()

    async def flush(self) -> None:
        """
        Wait until every queued write has hit the backend.

        Raises the most recent PersistenceFailure (once) if a write failed.
        """
        await self._queue.join()
        error, self._last_error = self._last_error, None
        if error is not None:
            raise error

    async def close(self) -> None:
        """Flush pending writes and stop the writer task."""
        try:
            await self.flush()
        except PersistenceFailure:
            logger.warning("TaskStore closed with a failed write key=%s", self._key)
        finally:
            writer, self._writer = self._writer, None
            if writer is not None:
                writer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await writer
            self._listeners.clear()
