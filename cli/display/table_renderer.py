"""Table renderer for calendar lists."""

from dataclasses import dataclass, field

from rich.table import Table

from cli.display.console import console


@dataclass
class CalendarInfo:
    """Information about a calendar for display."""

    uri: str
    display_name: str
    color: str | None = None
    components: list[str] = field(default_factory=list)
    object_count: int = 0


class TableRenderer:
    """Render tables for calendar lists.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_calendar_list(self, calendars: list[CalendarInfo], user_id: str) -> None:
        """Render a list of calendars as a table.

        Args:
            calendars: List of CalendarInfo objects to display.
            user_id: Owner of the calendars (for header).
        """
        if not calendars:
            console.print(f"No calendars found for <{user_id}>", highlight=False)
            return

        console.print(f"Calendars of <{user_id}>:", highlight=False)
        console.print()

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("URI", style="cyan")
        table.add_column("NAME")
        table.add_column("COLOR", style="dim")
        table.add_column("COMPONENTS", style="dim")
        table.add_column("OBJECTS", justify="right")

        for cal in calendars:
            table.add_row(
                cal.uri,
                cal.display_name or "-",
                cal.color or "-",
                ",".join(cal.components) or "-",
                str(cal.object_count),
            )

        console.print(table)
