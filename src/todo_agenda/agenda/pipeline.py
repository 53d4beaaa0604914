"""End-to-end agenda computation over a populated registry."""

from __future__ import annotations

import logging

from todo_agenda.agenda.graph import topological_sequence
from todo_agenda.agenda.models import AgendaResult
from todo_agenda.agenda.ranking import complete_overdue, rank_tasks, to_ranked, unblocked_tasks
from todo_agenda.agenda.registry import TaskRegistry
from todo_agenda.agenda.urgency import propagate_urgency
from todo_agenda.config import AgendaSettings

logger = logging.getLogger(__name__)


class AgendaPipeline:
    """Sequence, score, filter and rank the tasks of one registry snapshot."""

    def __init__(self, settings: AgendaSettings) -> None:
        self.settings = settings

    def run(self, registry: TaskRegistry) -> AgendaResult:
        auto_completed = 0
        if self.settings.complete_overdue:
            auto_completed = complete_overdue(registry, self.settings.today)

        sequence = topological_sequence(registry)
        propagate_urgency(
            sequence,
            registry,
            today=self.settings.today,
            default_days=self.settings.default_days,
        )
        ranked = rank_tasks(unblocked_tasks(sequence, registry))
        logger.debug(
            "Agenda built: tasks=%d unblocked=%d auto_completed=%d",
            len(sequence),
            len(ranked),
            auto_completed,
        )
        return AgendaResult(
            ranked=[to_ranked(task) for task in ranked],
            sequence=[task.name for task in sequence],
            auto_completed=auto_completed,
        )


def build_agenda(registry: TaskRegistry, settings: AgendaSettings) -> AgendaResult:
    """Run the agenda pipeline with the provided settings."""

    return AgendaPipeline(settings).run(registry)
