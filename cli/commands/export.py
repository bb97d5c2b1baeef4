"""Export a user's calendars to ICS files."""

import logging
from datetime import date
from pathlib import Path

import typer
from typing_extensions import Annotated

from calmigrate.exceptions import CalendarError, NothingToExportError
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def parse_date(date_str: str | None) -> date | None:
    """Parse a date string in YYYY-MM-DD format."""
    if date_str is None:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format: {date_str}. Use YYYY-MM-DD.")


def export_command(
    user_id: Annotated[
        str,
        typer.Argument(help="User whose calendars to export"),
    ],
    dest_dir: Annotated[
        Path | None,
        typer.Option(
            "--dest", "-d", help="Directory to write ICS files to (default: CALMIGRATE_EXPORT_DIR)"
        ),
    ] = None,
    export_date: Annotated[
        str | None,
        typer.Option("--date", help="Date used in file names (YYYY-MM-DD, default: today)"),
    ] = None,
) -> None:
    """
    Export all calendars of a user to ICS files.

    Writes one "<calendar name>-YYYY-MM-DD.ics" file per calendar.
    Deleted calendars and subscriptions are skipped.
    """
    ctx = get_context()
    dest_dir = dest_dir or ctx.config.export_dir
    parsed_date = parse_date(export_date)

    try:
        paths = ctx.migrator.export(user_id, dest_dir, parsed_date)
    except NothingToExportError:
        console.print(f"User <{user_id}> has no calendars to export")
        raise typer.Exit(1)
    except CalendarError as e:
        logger.error(f"Error exporting <{user_id}> calendars: {e}")
        raise typer.Exit(1)

    for path in paths:
        console.print(
            f"[bold green]✓[/bold green] Exported calendar of <{user_id}> into {path.resolve()}",
            highlight=False,
        )

