# src/study_buddy/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.loop_runner import LoopRunner
from ..core.state import AppState
from ..tasks.task_models import Task
from ..tasks.task_store import calculate_task_stats

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _log_task_list(tasks: list[Task]) -> None:
    stats = calculate_task_stats(tasks)
    logger.debug("Task list now total=%s done=%s pending=%s", stats.total, stats.done, stats.pending)


def run_console_loop(
    state: AppState,
    runner: LoopRunner,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Blocking REPL on the calling thread.

    Every command is executed on the store's loop thread (runner), so the store
    keeps a single owner.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "StudyBuddy Planner"))
    logger.info("Console connector started.")
    write(f"[{_ts_local()}] {app_name}. Use /help for commands. Use /exit to quit.\n")

    unsubscribe = runner.call(state.task_store.subscribe, _log_task_list)
    write(runner.call(command_registry.handle, state, "/list") or "")

    try:
        while True:
            try:
                user_input = read(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                write("")
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                write("Commands start with '/'. Use /help to list available commands.")
                continue

            try:
                reply = runner.call(command_registry.handle, state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is not None:
                write(f"[{_ts_local()}] {reply}")
    finally:
        runner.call(unsubscribe)

    logger.info("Console connector finished.")
