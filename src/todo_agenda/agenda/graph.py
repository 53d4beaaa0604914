"""Topological sequencing of the task dependency graph."""

from __future__ import annotations

import logging

from todo_agenda.agenda.errors import CyclicDependencyError, UndefinedTaskError
from todo_agenda.agenda.models import Task, VisitState
from todo_agenda.agenda.registry import TaskRegistry

logger = logging.getLogger(__name__)


def topological_sequence(registry: TaskRegistry) -> list[Task]:
    """Order every task so that each prerequisite precedes its dependents.

    Depth-first traversal driven by an explicit stack of ``(task, next edge)``
    frames. Roots are taken in registry order. Reaching a task that is still
    in progress means a cycle; the frames from that task to the top of the
    stack are reported as the cycle.
    """

    states = [VisitState.UNVISITED] * len(registry)
    sequence: list[Task] = []

    for root in registry:
        if states[root.index] is not VisitState.UNVISITED:
            continue
        _visit_from(root, registry, states, sequence)

    for task in sequence:
        if not task.initialized:
            raise UndefinedTaskError.for_task(task.name)

    logger.debug("Sequenced %d tasks", len(sequence))
    return sequence


def _visit_from(
    root: Task,
    registry: TaskRegistry,
    states: list[VisitState],
    sequence: list[Task],
) -> None:
    states[root.index] = VisitState.IN_PROGRESS
    stack: list[tuple[Task, int]] = [(root, 0)]

    while stack:
        task, edge = stack[-1]
        if edge == len(task.dependencies):
            stack.pop()
            states[task.index] = VisitState.FINISHED
            sequence.append(task)
            continue

        stack[-1] = (task, edge + 1)
        target = registry.get(task.dependencies[edge])
        state = states[target.index]
        if state is VisitState.FINISHED:
            continue
        if state is VisitState.IN_PROGRESS:
            raise CyclicDependencyError.for_cycle(_cycle_witness(stack, target))
        states[target.index] = VisitState.IN_PROGRESS
        stack.append((target, 0))


def _cycle_witness(stack: list[tuple[Task, int]], target: Task) -> tuple[str, ...]:
    names = [task.name for task, _ in stack]
    start = names.index(target.name)
    return (*names[start:], target.name)
