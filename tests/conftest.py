"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from todo_agenda.agenda.registry import TaskRegistry
from todo_agenda.sources.reader import TaskSource, load_sources

_AGENDA_ENV_VARS = (
    "TODO_AGENDA_TODAY",
    "TODO_AGENDA_COMPLETE_OVERDUE",
    "TODO_AGENDA_LONG_FORMAT",
    "TODO_AGENDA_DEFAULT_DAYS",
)


@pytest.fixture(autouse=True)
def _clean_agenda_env(monkeypatch):
    """Keep developer environment variables out of settings under test."""
    for name in _AGENDA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def load_text() -> Callable[[str], TaskRegistry]:
    """Build a registry from task-file text; input must parse without errors."""

    def _load(text: str) -> TaskRegistry:
        registry = TaskRegistry()
        report = load_sources(registry, [TaskSource(name="todo.txt", lines=text.splitlines())])
        assert report.errors == []
        return registry

    return _load
