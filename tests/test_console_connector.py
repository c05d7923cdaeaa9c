# tests/test_console_connector.py

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from study_buddy.connectors.console_connector import run_console_loop
from study_buddy.core.loop_runner import LoopRunner, start_loop_in_background
from study_buddy.core.state import AppState
from study_buddy.tasks.task_store import TaskStore

from .fakes import FakePrefs


@pytest.fixture()
def runner() -> Iterator[LoopRunner]:
    r = start_loop_in_background(name="test-store-loop")
    yield r
    r.stop()
    r.join(timeout=5.0)


def _scripted(lines: list[str]):
    it = iter(lines)

    def read(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def test_console_runs_commands_on_store_loop(
    settings: SimpleNamespace, prefs: FakePrefs, store: TaskStore, runner: LoopRunner
) -> None:
    runner.run(store.initialize(), timeout=5.0)
    state = AppState(settings=settings, prefs=prefs, task_store=store)
    out: list[str] = []

    run_console_loop(
        state,
        runner,
        read=_scripted(["", "hello", "/add Essay | English", "/done 2", "/stats", "/exit", "/clear"]),
        write=out.append,
    )
    runner.run(store.close(), timeout=5.0)

    text = "\n".join(out)
    assert "Math revision" in text  # initial /list
    assert "Commands start with '/'" in text
    assert "Added: [ ] Essay (English)" in text
    assert "[x] Read chapter 3 (Physics)" in text
    assert "Total tasks: 3" in text
    # /clear comes after /exit and must not run.
    assert len(store.tasks) == 3
    assert prefs.data["tasks_data"].count("\n") == 2


def test_console_stops_on_eof_and_reports_handler_crash(
    settings: SimpleNamespace, prefs: FakePrefs, store: TaskStore, runner: LoopRunner, monkeypatch
) -> None:
    runner.run(store.initialize(), timeout=5.0)
    state = AppState(settings=settings, prefs=prefs, task_store=store)
    out: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "clear_all", boom)

    run_console_loop(state, runner, read=_scripted(["/clear"]), write=out.append)
    runner.run(store.close(), timeout=5.0)

    assert any("Internal error while handling a command." in line for line in out)
