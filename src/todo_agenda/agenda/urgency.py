"""Urgency scoring and propagation along dependency edges.

Urgency is the inverse of niceness: lower scores are more pressing. A task's
own score is the signed base-2 order of magnitude of the days left until its
deadline, minus its priority. Tasks without a deadline count as due in
``DEFAULT_DAYS`` days, so a plain task scores ``log2(8) - 0 = 3``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from todo_agenda.agenda.models import LEAST_URGENT, Task
from todo_agenda.agenda.registry import TaskRegistry

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 8


def days_left(task: Task, today: date, default_days: int = DEFAULT_DAYS) -> int:
    if task.due is None:
        return default_days
    return (task.due - today).days


def urgency_bucket(days: int) -> int:
    """Return floor(log2(|days|)), negated for overdue tasks; 0 for -1..1."""

    magnitude = max(abs(days).bit_length() - 1, 0)
    return -magnitude if days < 0 else magnitude


def base_urgency(task: Task, today: date, default_days: int = DEFAULT_DAYS) -> int:
    return urgency_bucket(days_left(task, today, default_days)) - task.priority.value


def propagate_urgency(
    sequence: Sequence[Task],
    registry: TaskRegistry,
    today: date,
    default_days: int = DEFAULT_DAYS,
) -> None:
    """Assign urgency to every task in ``sequence``.

    ``sequence`` must be topological (prerequisites first). Walking it
    backwards visits every dependent before its prerequisites, so by the time a
    task is reached it has already absorbed the most urgent score of
    everything that depends on it.
    """

    for task in sequence:
        task.urgency = LEAST_URGENT

    for task in reversed(sequence):
        task.urgency = min(task.urgency, base_urgency(task, today, default_days))
        for prerequisite in registry.prerequisites(task):
            if task.urgency < prerequisite.urgency:
                prerequisite.urgency = task.urgency

    logger.debug("Propagated urgency over %d tasks (today=%s)", len(sequence), today)
