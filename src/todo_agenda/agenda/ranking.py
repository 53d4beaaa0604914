"""Completion policy, blocking filter and urgency ranking."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from todo_agenda.agenda.models import RankedTask, Task
from todo_agenda.agenda.registry import TaskRegistry

logger = logging.getLogger(__name__)


def complete_overdue(registry: TaskRegistry, today: date) -> int:
    """Mark open tasks whose deadline has passed as done; return how many."""

    completed = 0
    for task in registry:
        if task.done or task.due is None or task.due >= today:
            continue
        task.done = True
        completed += 1
        logger.debug("Auto-completed overdue task %s (due %s)", task.name, task.due_label)
    return completed


def is_blocked(task: Task, registry: TaskRegistry) -> bool:
    """A task is blocked while it is open and any prerequisite is still open."""

    if task.done:
        return False
    return any(not prerequisite.done for prerequisite in registry.prerequisites(task))


def unblocked_tasks(tasks: Iterable[Task], registry: TaskRegistry) -> list[Task]:
    return [
        task
        for task in tasks
        if task.initialized and not task.done and not is_blocked(task, registry)
    ]


def rank_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Sort by urgency, most urgent first.

    Ties fall back to the earlier deadline (no deadline last), then the name.
    """

    return sorted(
        tasks,
        key=lambda task: (task.urgency, task.due or date.max, task.name),
    )


def to_ranked(task: Task) -> RankedTask:
    return RankedTask(
        description=task.description,
        priority_label=task.priority.label,
        due=task.due_label,
        source=task.source,
        urgency=task.urgency,
    )
