"""Import ICS files as new calendars of a user."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from calmigrate.exceptions import CalendarError
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def import_command(
    user_id: Annotated[
        str,
        typer.Argument(help="User receiving the calendars"),
    ],
    files: Annotated[
        list[Path],
        typer.Argument(help='ICS files named "<calendar_name>-YYYY-MM-DD.ics"'),
    ],
) -> None:
    """
    Import ICS files as new calendars.

    Each file becomes a new calendar; existing calendars are never
    overwritten; a name that is taken gets a "-1", "-2", ... suffix.
    A file with invalid data leaves no calendar behind.
    """
    ctx = get_context()

    for path in files:
        try:
            calendar = ctx.migrator.import_file(user_id, path)
        except CalendarError as e:
            logger.error(f"Failed to import {path}: {e}")
            raise typer.Exit(1)

        console.print(
            f'[bold green]✓[/bold green] Imported calendar "{path.name}" to account '
            f"of <{user_id}> as '{calendar.uri}'",
            highlight=False,
        )
