"""Controller for the agenda CLI command."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TextIO

from todo_agenda.agenda.errors import StructuralError
from todo_agenda.agenda.models import RankedTask
from todo_agenda.agenda.pipeline import build_agenda
from todo_agenda.agenda.registry import TaskRegistry
from todo_agenda.config import Settings
from todo_agenda.sources.reader import load_sources, read_sources


@dataclass(slots=True)
class AgendaCommand:
    """CLI inputs for the agenda command."""

    files: tuple[Path, ...] = ()
    today: date | None = None
    complete_overdue: bool = False
    long_format: bool = False
    stdin: TextIO | None = None


@dataclass(slots=True)
class AgendaRunResult:
    """Printable outcome of one agenda run."""

    lines: list[str]
    diagnostics: list[str] = field(default_factory=list)
    success: bool = True
    fatal: str | None = None


class AgendaCliController:
    """Coordinates reading sources, building the agenda and formatting it."""

    def run(self, command: AgendaCommand) -> AgendaRunResult:
        settings = Settings.from_env(
            today=command.today,
            complete_overdue=command.complete_overdue,
            long_format=command.long_format,
        )
        sources, read_errors = read_sources(command.files, stdin=command.stdin)
        registry = TaskRegistry()
        report = load_sources(registry, sources, namespaced=len(command.files) > 1)
        diagnostics = [str(error) for error in [*read_errors, *report.errors]]
        try:
            result = build_agenda(registry, settings.agenda)
        except StructuralError as exc:
            return AgendaRunResult(lines=[], diagnostics=diagnostics, success=False, fatal=str(exc))

        return AgendaRunResult(
            lines=[
                format_task(task, long_format=settings.output.long_format)
                for task in result.ranked
            ],
            diagnostics=diagnostics,
            success=not read_errors and not report.had_errors,
        )


def format_task(task: RankedTask, *, long_format: bool) -> str:
    """Render one task; the long format adds priority, source and due date.

    Tasks only carry a source when several sources were merged.
    """

    if not long_format:
        return task.description
    parts = [f"({task.priority_label}) "]
    if task.source is not None:
        parts.append(f"{task.source}: ")
    parts.append(task.description)
    if task.due is not None:
        parts.append(f" due:{task.due}")
    return "".join(parts)
