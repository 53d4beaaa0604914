"""Error types raised while building the agenda."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class AgendaError(Exception):
    """Base agenda error."""

    message: str
    code: str = "agenda_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class StructuralError(AgendaError):
    """Fatal error: the dependency graph cannot be ordered."""


@dataclass(slots=True)
class CyclicDependencyError(StructuralError):
    """A task depends on itself, directly or transitively."""

    task_name: str = ""
    cycle: tuple[str, ...] = ()

    @classmethod
    def for_cycle(cls, cycle: tuple[str, ...]) -> CyclicDependencyError:
        path = " -> ".join(cycle)
        return cls(
            message=f"{cycle[0]}: cyclic dependency between tasks ({path})",
            code="cyclic_dependency",
            task_name=cycle[0],
            cycle=cycle,
        )


@dataclass(slots=True)
class UndefinedTaskError(StructuralError):
    """A task was referenced as a dependency but never defined."""

    task_name: str = ""

    @classmethod
    def for_task(cls, task_name: str) -> UndefinedTaskError:
        return cls(
            message=f'task "{task_name}" mentioned but not defined',
            code="undefined_task",
            task_name=task_name,
        )


@dataclass(slots=True)
class TaskLineError(AgendaError):
    """Recoverable problem with a single input line or property."""

    source: str | None = None
    line_number: int | None = None

    def __str__(self) -> str:
        location = ":".join(
            part
            for part in (self.source, str(self.line_number) if self.line_number else None)
            if part
        )
        return f"{location}: {self.message}" if location else self.message


@dataclass(slots=True)
class SourceReadError(AgendaError):
    """An input source could not be opened or read."""

    source: str = ""

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"
