"""Read task sources and load them into a registry."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from todo_agenda.agenda.errors import AgendaError, SourceReadError
from todo_agenda.agenda.registry import TaskRegistry
from todo_agenda.sources.parser import parse_task_line

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"
COMMENT_PREFIX = "#"


@dataclass(slots=True)
class TaskSource:
    """Raw lines of one input source."""

    name: str
    lines: list[str]


@dataclass(slots=True)
class LoadReport:
    """Result of loading sources into a registry."""

    sources_loaded: int = 0
    lines_loaded: int = 0
    errors: list[AgendaError] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        return bool(self.errors)


def iter_logical_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(first line number, text)`` for each logical task line.

    Blank lines and ``#`` comment lines are skipped. A line that starts with
    whitespace continues the previous logical line.
    """

    pending: tuple[int, str] | None = None
    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        if not stripped:
            if pending is not None:
                yield pending
                pending = None
            continue
        if stripped.startswith(COMMENT_PREFIX):
            continue
        if line[0].isspace() and pending is not None:
            pending = (pending[0], f"{pending[1]} {stripped}")
            continue
        if pending is not None:
            yield pending
        pending = (number, stripped)
    if pending is not None:
        yield pending


def read_sources(
    paths: Sequence[str | Path],
    stdin: TextIO | None = None,
) -> tuple[list[TaskSource], list[SourceReadError]]:
    """Read every source; unreadable ones are reported and skipped."""

    sources: list[TaskSource] = []
    errors: list[SourceReadError] = []
    for path in paths or (STDIN_SOURCE,):
        name = str(path)
        try:
            if name == STDIN_SOURCE:
                lines = (stdin or sys.stdin).read().splitlines()
            else:
                lines = Path(path).read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Failed to read %s", name, exc_info=True)
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            errors.append(SourceReadError(message=reason, code="source_unreadable", source=name))
            continue
        sources.append(TaskSource(name=name, lines=lines))
    return sources, errors


def qualify_name(source: str | None, name: str) -> str:
    return f"{source}: {name}" if source is not None else name


def load_sources(
    registry: TaskRegistry,
    sources: Sequence[TaskSource],
    *,
    namespaced: bool | None = None,
) -> LoadReport:
    """Define the tasks of every source in ``registry``.

    With more than one source (or ``namespaced`` set by the caller, who knows
    how many sources were requested), task names are qualified by their source so
    that equal names in different files stay distinct; dependencies resolve
    within the same source.
    """

    report = LoadReport()
    if namespaced is None:
        namespaced = len(sources) > 1
    for source in sources:
        prefix = source.name if namespaced else None
        for line_number, text in iter_logical_lines(source.lines):
            parsed = parse_task_line(text, source=source.name, line_number=line_number)
            report.errors.extend(parsed.errors)
            if parsed.task is None:
                continue
            line = parsed.task
            task = registry.define(
                qualify_name(prefix, line.name),
                line.description,
                due=line.due,
                priority=line.priority,
                done=line.done,
                source=prefix,
            )
            for dependency in line.dependencies:
                registry.add_dependency(task, qualify_name(prefix, dependency))
            report.lines_loaded += 1
        report.sources_loaded += 1
    for error in report.errors:
        logger.debug("Skipped input: %s", error)
    return report
