# src/study_buddy/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import ValidationError
from ..core.state import AppState
from ..tasks.task_api import format_stats, format_task_line, submit_new_task
from ..tasks.task_store import calculate_task_stats

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        The handler receives the raw text after the command name, so "/add"
        can use "|" separated fields with spaces inside.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        name = name.lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, arg: str) -> str:
    tasks = state.task_store.tasks
    if not tasks:
        return "No tasks yet. Use /add to start."
    lines = ["Today's tasks:"]
    lines.extend(f"  {format_task_line(t)}" for t in tasks)
    return "\n".join(lines)


def cmd_add(state: AppState, arg: str) -> str:
    """
    /add Title | Subject              -> due today
    /add Title | Subject | 2024-05-01 -> explicit due date
    """
    parts = [p.strip() for p in arg.split("|")]
    if len(parts) not in (2, 3):
        return "Usage: /add <title> | <subject> [| YYYY-MM-DD]"

    title, subject = parts[0], parts[1]
    due_text = parts[2] if len(parts) == 3 else ""

    try:
        task = submit_new_task(state.task_store, title, subject, due_text)
    except ValidationError as e:
        return str(e)

    if task is None:
        return "Task was not added."
    logger.info("Task added from console id=%s", task.id)
    return f"Added: {format_task_line(task)}"


def cmd_done(state: AppState, arg: str) -> str:
    """
    /done <id> -> toggle the done flag of a task
    """
    try:
        task_id = int(arg)
    except ValueError:
        return "Usage: /done <id>"

    store = state.task_store
    store.toggle_done(task_id)
    task = next((t for t in store.tasks if t.id == task_id), None)
    if task is None:
        return f"No task with id={task_id}."
    return format_task_line(task)


def cmd_stats(state: AppState, arg: str) -> str:
    return format_stats(calculate_task_stats(state.task_store.tasks))


def cmd_clear(state: AppState, arg: str) -> str:
    state.task_store.clear_all()
    logger.info("All tasks cleared from console.")
    return "All tasks cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["ls", "home"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <subject> [| YYYY-MM-DD].")
registry.register("done", cmd_done, help_text="Toggle a task done/not done: /done <id>.", aliases=["toggle"])
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counts.")
registry.register("clear", cmd_clear, help_text="Clear all tasks.")
