"""Parser for single task definition lines.

Grammar::

    [TODO|DONE] <name>: [(A|B|C)] <description> [(A|B|C)] [due:YYYY-MM-DD] [deps:a,b]

Properties are ``key:value`` tokens at the end of the line. Problems with a
single property are reported but do not discard the rest of the line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date

from todo_agenda.agenda.errors import TaskLineError
from todo_agenda.agenda.models import Priority, TaskLine
from todo_agenda.config import parse_date

PROP_DUE = "due"
PROP_DEPS = "deps"

_STATUS_RE = re.compile(r"(TODO|DONE)(?=\s|$)")
_NAME_RE = re.compile(r"([^\s:]*):")
_PRIORITY_RE = re.compile(r"\(([ABC])\)")


@dataclass(slots=True)
class ParsedLine:
    """Parse outcome: the task line (if any) and recoverable errors found."""

    task: TaskLine | None
    errors: list[TaskLineError] = field(default_factory=list)


def parse_task_line(
    text: str,
    *,
    source: str | None = None,
    line_number: int | None = None,
) -> ParsedLine:
    """Parse one logical line into a :class:`TaskLine`."""

    def error(message: str, code: str) -> TaskLineError:
        return TaskLineError(
            message=message,
            code=code,
            source=source,
            line_number=line_number,
        )

    rest = text.strip()
    done = False
    status = _STATUS_RE.match(rest)
    if status is not None:
        done = status.group(1) == "DONE"
        rest = rest[status.end() :].lstrip()

    name_match = _NAME_RE.match(rest)
    if name_match is None:
        return ParsedLine(
            task=None,
            errors=[error(f"malformed task line: {text.strip()!r}", "malformed_line")],
        )
    name = name_match.group(1)
    if not name:
        return ParsedLine(task=None, errors=[error("task name is empty", "empty_name")])
    rest = rest[name_match.end() :].strip()

    errors: list[TaskLineError] = []
    due: date | None = None
    dependencies: list[str] = []
    rest, properties = _split_properties(rest)
    for prop, value in properties:
        if prop == PROP_DUE:
            try:
                due = parse_date(value)
            except ValueError:
                errors.append(error(f"improper time format: {value}", "bad_due_date"))
        elif prop == PROP_DEPS:
            dependencies.extend(dep for dep in (part.strip() for part in value.split(",")) if dep)
        else:
            errors.append(error(f'unknown property "{prop}"', "unknown_property"))

    description, priority = _split_priority(rest)
    return ParsedLine(
        task=TaskLine(
            name=name,
            description=description,
            due=due,
            priority=priority,
            done=done,
            dependencies=tuple(dependencies),
        ),
        errors=errors,
    )


def _split_properties(body: str) -> tuple[str, list[tuple[str, str]]]:
    """Peel trailing ``key:value`` tokens; return the remaining body and pairs in line order."""

    properties: list[tuple[str, str]] = []
    while body:
        parts = body.rsplit(maxsplit=1)
        token = parts[-1]
        if ":" not in token:
            break
        prop, value = token.split(":", 1)
        properties.append((prop, value))
        body = parts[0] if len(parts) == 2 else ""  # noqa: PLR2004
    properties.reverse()
    return body, properties


def _split_priority(body: str) -> tuple[str, Priority]:
    leading = _PRIORITY_RE.match(body)
    if leading is not None and (leading.end() == len(body) or body[leading.end()].isspace()):
        return body[leading.end() :].strip(), Priority.from_label(leading.group(1))

    parts = body.rsplit(maxsplit=1)
    if parts and _PRIORITY_RE.fullmatch(parts[-1]):
        remaining = parts[0] if len(parts) == 2 else ""  # noqa: PLR2004
        return remaining, Priority.from_label(parts[-1][1])
    return body, Priority.NORMAL
