"""Task registry: name-indexed arena of tasks."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date

from todo_agenda.agenda.models import Priority, Task

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Deduplicates tasks by name and stores them in insertion order.

    Tasks live in a flat list; the name map and dependency edges hold list
    indexes, so a task keeps the same identity for the whole run.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._index_by_name: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._index_by_name

    def get(self, index: int) -> Task:
        return self._tasks[index]

    def find(self, name: str) -> Task | None:
        index = self._index_by_name.get(name)
        return self._tasks[index] if index is not None else None

    def lookup_or_create(self, name: str, *, source: str | None = None) -> Task:
        """Return the task registered under ``name``, creating a placeholder if needed."""

        index = self._index_by_name.get(name)
        if index is not None:
            return self._tasks[index]
        task = Task(index=len(self._tasks), name=name, source=source)
        self._tasks.append(task)
        self._index_by_name[name] = task.index
        return task

    def define(  # noqa: PLR0913
        self,
        name: str,
        description: str,
        due: date | None = None,
        priority: Priority = Priority.NORMAL,
        done: bool = False,
        *,
        source: str | None = None,
    ) -> Task:
        """Fill in (or overwrite) a task's fields; its dependencies are left untouched."""

        task = self.lookup_or_create(name, source=source)
        if task.initialized:
            logger.debug("Redefining task %s", name)
        task.description = description
        task.due = due
        task.priority = priority
        task.done = done
        task.initialized = True
        return task

    def add_dependency(self, task: Task, depends_on_name: str) -> Task:
        """Add an edge from ``task`` to the prerequisite named ``depends_on_name``."""

        prerequisite = self.lookup_or_create(depends_on_name, source=task.source)
        if prerequisite.index not in task.dependency_set:
            task.dependency_set.add(prerequisite.index)
            task.dependencies.append(prerequisite.index)
        return prerequisite

    def prerequisites(self, task: Task) -> list[Task]:
        return [self._tasks[index] for index in task.dependencies]
