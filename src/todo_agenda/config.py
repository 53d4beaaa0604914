"""Runtime configuration for the todo agenda."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date, datetime

from todo_agenda.agenda.urgency import DEFAULT_DAYS


@dataclass(slots=True)
class AgendaSettings:
    """Reference date and policy flags threaded through the agenda pipeline."""

    today: date = field(default_factory=date.today)
    complete_overdue: bool = False
    default_days: int = DEFAULT_DAYS


@dataclass(slots=True)
class OutputSettings:
    """Presentation settings."""

    long_format: bool = False


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    agenda: AgendaSettings = field(default_factory=AgendaSettings)
    output: OutputSettings = field(default_factory=OutputSettings)

    @classmethod
    def from_env(
        cls,
        *,
        today: date | None = None,
        complete_overdue: bool | None = None,
        long_format: bool | None = None,
    ) -> Settings:
        """Load settings from environment; explicit arguments win over variables."""

        settings = cls(
            agenda=AgendaSettings(
                today=today or _env_date("TODO_AGENDA_TODAY") or date.today(),
                complete_overdue=bool(complete_overdue)
                or _env_bool("TODO_AGENDA_COMPLETE_OVERDUE", default=False),
                default_days=_env_int("TODO_AGENDA_DEFAULT_DAYS", default=DEFAULT_DAYS),
            ),
            output=OutputSettings(
                long_format=bool(long_format)
                or _env_bool("TODO_AGENDA_LONG_FORMAT", default=False),
            ),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise configuration error for out-of-range values."""

        if self.agenda.default_days <= 0:
            raise ValueError("TODO_AGENDA_DEFAULT_DAYS must be > 0.")


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` date."""

    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as error:
        raise ValueError(f"improper time format: {value!r}") from error


def _env_date(name: str) -> date | None:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as error:
        raise ValueError(f"Invalid date value for {name}: {value!r}") from error


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError as error:
        raise ValueError(f"Invalid integer value for {name}: {value!r}") from error


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
