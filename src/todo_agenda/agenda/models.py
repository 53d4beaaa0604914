"""Domain models for the task agenda."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

LEAST_URGENT = sys.maxsize


class Priority(int, Enum):
    """Ternary task priority, ordered by numeric weight."""

    HIGH = 1
    NORMAL = 0
    LOW = -1

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> Priority:
        """Resolve a single-letter label (A, B or C)."""

        for priority, candidate in _PRIORITY_LABELS.items():
            if candidate == label:
                return priority
        raise ValueError(f"Unknown priority label: {label!r}")


_PRIORITY_LABELS = {
    Priority.HIGH: "A",
    Priority.NORMAL: "B",
    Priority.LOW: "C",
}


class VisitState(str, Enum):
    """Traversal marker used while sequencing the dependency graph."""

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(slots=True)
class Task:
    """One to-do item stored in the registry arena.

    Dependencies are arena indexes of prerequisite tasks, kept in insertion
    order with ``dependency_set`` mirroring them for membership checks. They
    only ever grow:
    redefining a task keeps the edges gathered from earlier definitions.
    """

    index: int
    name: str
    source: str | None = None
    description: str = ""
    due: date | None = None
    priority: Priority = Priority.NORMAL
    done: bool = False
    initialized: bool = False
    urgency: int = LEAST_URGENT
    dependencies: list[int] = field(default_factory=list)
    dependency_set: set[int] = field(default_factory=set, repr=False)

    @property
    def due_label(self) -> str | None:
        return self.due.isoformat() if self.due is not None else None


@dataclass(slots=True, frozen=True)
class TaskLine:
    """Task definition as produced by the line parser."""

    name: str
    description: str
    due: date | None = None
    priority: Priority = Priority.NORMAL
    done: bool = False
    dependencies: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RankedTask:
    """Presentation payload for one unblocked task."""

    description: str
    priority_label: str
    due: str | None
    source: str | None
    urgency: int


@dataclass(slots=True)
class AgendaResult:
    """Outcome of one agenda pipeline run."""

    ranked: list[RankedTask]
    sequence: list[str]
    auto_completed: int = 0
