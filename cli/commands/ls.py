"""List a user's calendars."""

import typer
from typing_extensions import Annotated

from calmigrate.constants import USERS_URI_ROOT
from cli.context import get_context
from cli.display.table_renderer import CalendarInfo, TableRenderer


def ls_command(
    user_id: Annotated[
        str,
        typer.Argument(help="User whose calendars to list"),
    ],
) -> None:
    """List calendars of a user."""
    ctx = get_context()
    store = ctx.store

    calendars = [
        CalendarInfo(
            uri=calendar.uri,
            display_name=calendar.display_name,
            color=calendar.color,
            components=calendar.components,
            object_count=len(store.list_objects(calendar.storage_id)),
        )
        for calendar in store.list_calendars(USERS_URI_ROOT + user_id)
    ]

    TableRenderer().render_calendar_list(calendars, user_id)
