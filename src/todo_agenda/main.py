"""CLI entrypoint for todo-agenda."""

from datetime import datetime
from pathlib import Path

import rich_click as click

from todo_agenda import __version__
from todo_agenda.agenda.controllers import AgendaCliController, AgendaCommand

AGENDA_CONTROLLER = AgendaCliController()


@click.command()
@click.version_option(version=__version__, prog_name="todo")
@click.option(
    "-d",
    "--done-overdue",
    "complete_overdue",
    is_flag=True,
    default=False,
    help="Treat tasks whose deadline has passed as done.",
)
@click.option(
    "-l",
    "--long",
    "long_format",
    is_flag=True,
    default=False,
    help="Show priority, source and due date next to each task.",
)
@click.option(
    "-T",
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (yyyy-mm-dd) used instead of the current date.",
)
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
def todo(
    complete_overdue: bool,
    long_format: bool,
    today: datetime | None,
    files: tuple[Path, ...],
) -> None:
    """Print unblocked tasks from FILES (or stdin), most urgent first."""

    try:
        result = AGENDA_CONTROLLER.run(
            AgendaCommand(
                files=files,
                today=today.date() if today is not None else None,
                complete_overdue=complete_overdue,
                long_format=long_format,
            ),
        )
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    _emit_lines(result.diagnostics, err=True)
    if result.fatal is not None:
        raise click.ClickException(result.fatal)
    _emit_lines(result.lines)
    if not result.success:
        raise click.ClickException("Some input could not be processed.")


def _emit_lines(lines: list[str], *, err: bool = False) -> None:
    for line in lines:
        click.echo(line, err=err)


if __name__ == "__main__":  # pragma: no cover
    todo()
