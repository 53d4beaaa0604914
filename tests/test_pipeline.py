from __future__ import annotations

from datetime import date

import allure
import pytest

from todo_agenda.agenda.errors import CyclicDependencyError, UndefinedTaskError
from todo_agenda.agenda.pipeline import AgendaPipeline, build_agenda
from todo_agenda.config import AgendaSettings

pytestmark = [
    allure.epic("Agenda Engine"),
    allure.feature("End-to-end Agenda"),
]

TODAY = date(2026, 3, 2)


def _settings(**overrides) -> AgendaSettings:
    return AgendaSettings(today=TODAY, **overrides)


def test_blocked_dependent_is_hidden_and_prerequisite_gets_deadline_urgency(load_text) -> None:
    registry = load_text("A: desc-a deps:B\nB: desc-b due:2026-03-03\n")

    result = build_agenda(registry, _settings())

    assert [task.description for task in result.ranked] == ["desc-b"]
    assert result.ranked[0].urgency == 0
    assert result.ranked[0].due == "2026-03-03"
    assert result.sequence == ["B", "A"]


def test_done_prerequisite_unblocks_high_priority_task(load_text) -> None:
    registry = load_text("A: desc-a (A) deps:B\nDONE B: desc-b\n")

    result = build_agenda(registry, _settings())

    assert len(result.ranked) == 1
    ranked = result.ranked[0]
    assert ranked.description == "desc-a"
    assert ranked.priority_label == "A"
    assert ranked.urgency == 2


def test_independent_chains_print_in_due_date_order(load_text) -> None:
    registry = load_text(
        "late-top: Late top due:2026-03-07 deps:late-mid\n"
        "late-mid: Late middle deps:late-base\n"
        "late-base: Late base\n"
        "soon-top: Soon top due:2026-03-03 deps:soon-base\n"
        "soon-base: Soon base\n"
        "mid-top: Mid top due:2026-03-04 deps:mid-base\n"
        "mid-base: Mid base\n",
    )

    result = build_agenda(registry, _settings())

    assert [task.description for task in result.ranked] == ["Soon base", "Mid base", "Late base"]
    assert [task.urgency for task in result.ranked] == [0, 1, 2]


def test_equal_priority_deadlines_print_in_increasing_due_order(load_text) -> None:
    registry = load_text(
        "c: third due:2026-03-20\n"
        "a: first due:2026-03-03\n"
        "b: second due:2026-03-07\n"
        "d: fourth due:2026-03-08\n",
    )

    result = build_agenda(registry, _settings())

    assert [task.due for task in result.ranked] == [
        "2026-03-03",
        "2026-03-07",
        "2026-03-08",
        "2026-03-20",
    ]


def test_redefinition_keeps_one_task_with_latest_description_and_all_edges(load_text) -> None:
    registry = load_text(
        "A: first deps:B\n"
        "DONE B: b\n"
        "C: c\n"
        "A: second deps:C\n",
    )

    result = build_agenda(registry, _settings())

    assert [task.description for task in result.ranked] == ["c"]
    assert [dep.name for dep in registry.prerequisites(registry.find("A"))] == ["B", "C"]
    assert sum(1 for task in registry if task.name == "A") == 1

    registry.find("C").done = True
    result = build_agenda(registry, _settings())
    assert [task.description for task in result.ranked] == ["second"]


def test_blocked_task_never_shows_even_when_overdue(load_text) -> None:
    registry = load_text("late: Very late (A) due:2026-01-01 deps:other\nother: Other (C)\n")

    result = build_agenda(registry, _settings())

    assert [task.description for task in result.ranked] == ["Other"]
    assert result.ranked[0].urgency == -6


def test_overdue_tasks_are_completed_when_policy_enabled(load_text) -> None:
    registry = load_text("late: Late due:2026-02-01 deps:base\nbase: Base\nnext: Next\n")

    result = AgendaPipeline(_settings(complete_overdue=True)).run(registry)

    assert result.auto_completed == 1
    assert [task.description for task in result.ranked] == ["Base", "Next"]


def test_overdue_tasks_stay_open_by_default(load_text) -> None:
    registry = load_text("late: Late due:2026-02-01\nnext: Next\n")

    result = build_agenda(registry, _settings())

    assert result.auto_completed == 0
    assert [task.description for task in result.ranked] == ["Late", "Next"]


def test_default_days_setting_changes_default_bucket(load_text) -> None:
    registry = load_text("a: plain\n")

    result = build_agenda(registry, _settings(default_days=32))

    assert result.ranked[0].urgency == 5


def test_cycle_aborts_without_output(load_text) -> None:
    registry = load_text("A: desc-a deps:B\nB: desc-b deps:A\nC: fine\n")

    with pytest.raises(CyclicDependencyError):
        build_agenda(registry, _settings())


def test_undefined_reference_aborts(load_text) -> None:
    registry = load_text("A: desc-a deps:ghost\n")

    with pytest.raises(UndefinedTaskError, match="ghost"):
        build_agenda(registry, _settings())


def test_auto_completed_overdue_prerequisite_unblocks_dependent(load_text) -> None:
    text = "top: Top deps:base\nbase: Base due:2026-02-20\n"

    enabled = build_agenda(load_text(text), _settings(complete_overdue=True))
    default = build_agenda(load_text(text), _settings())

    assert enabled.auto_completed == 1
    assert [task.description for task in enabled.ranked] == ["Top"]
    assert [task.description for task in default.ranked] == ["Base"]
