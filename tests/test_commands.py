# tests/test_commands.py

from __future__ import annotations

from types import SimpleNamespace

import pytest
import pytest_asyncio

from study_buddy.cli.commands import CommandRegistry, registry
from study_buddy.core.state import AppState
from study_buddy.tasks.task_store import TaskStore

from .fakes import FakePrefs


@pytest_asyncio.fixture()
async def state(settings: SimpleNamespace, prefs: FakePrefs, store: TaskStore) -> AppState:
    await store.initialize()
    return AppState(settings=settings, prefs=prefs, task_store=store)


def test_command_registry_routes_raw_argument_text() -> None:
    reg = CommandRegistry()
    seen: list[str] = []

    def handler(state, arg):
        seen.append(arg)
        return "ok"

    reg.register("echo", handler, "echo", aliases=["e"])

    assert reg.handle(None, "/echo  a | b  c ") == "ok"  # type: ignore[arg-type]
    assert reg.handle(None, "/E x") == "ok"  # type: ignore[arg-type]
    assert seen == ["a | b  c", "x"]


def test_command_registry_unknown_and_non_command() -> None:
    reg = CommandRegistry()
    assert reg.handle(None, "hello") is None  # type: ignore[arg-type]
    assert "Unknown command" in (reg.handle(None, "/nope") or "")  # type: ignore[arg-type]
    assert "Empty command" in (reg.handle(None, "/") or "")  # type: ignore[arg-type]


def test_help_lists_commands() -> None:
    text = registry.handle(None, "/help") or ""  # type: ignore[arg-type]
    for name in ("/add", "/list", "/done", "/stats", "/clear"):
        assert name in text


@pytest.mark.asyncio
async def test_add_list_done_stats_clear_flow(state: AppState) -> None:
    reply = registry.handle(state, "/add Organic chemistry | Chemistry | 2024-06-01")
    assert reply == "Added: [ ] Organic chemistry (Chemistry) due 2024-06-01 #1700000000000"

    listing = registry.handle(state, "/list") or ""
    assert listing.splitlines()[0] == "Today's tasks:"
    assert "Math revision" in listing
    assert "Organic chemistry" in listing

    assert registry.handle(state, "/done 1") == "[x] Math revision (Math) due 2024-01-01 #1"
    assert registry.handle(state, "/stats") == "Stats:\n  Total tasks: 3\n  Completed: 1\n  Pending: 2"

    assert registry.handle(state, "/clear") == "All tasks cleared."
    assert registry.handle(state, "/list") == "No tasks yet. Use /add to start."
    assert registry.handle(state, "/stats") == "Stats:\n  Total tasks: 0\n  Completed: 0\n  Pending: 0"

    await state.task_store.flush()
    assert state.prefs.get("tasks_data") == ""


@pytest.mark.asyncio
async def test_add_shows_validation_messages(state: AppState) -> None:
    before = state.task_store.tasks

    assert registry.handle(state, "/add  | Math") == "Title and subject cannot be empty."
    assert registry.handle(state, "/add Algebra | Math | 1/2/2024") == "Invalid date. Use format YYYY-MM-DD."
    assert (registry.handle(state, "/add just a title") or "").startswith("Usage: /add")

    assert state.task_store.tasks == before


@pytest.mark.asyncio
async def test_done_usage_and_unknown_id(state: AppState) -> None:
    assert registry.handle(state, "/done abc") == "Usage: /done <id>"
    assert registry.handle(state, "/toggle 999") == "No task with id=999."
