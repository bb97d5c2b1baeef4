"""Exception hierarchy for calendar migration."""


class CalendarError(Exception):
    """Base exception for calendar migration."""

    pass


class InvalidCalendarError(CalendarError):
    """Resource is not a valid or current calendar (deleted, wrong type)."""

    pass


class MigratorError(CalendarError):
    """Unexpected failure that aborts the current migration operation."""

    def __init__(self, message: str = "", calendar: str | None = None):
        super().__init__(message)
        self.calendar = calendar


class NothingToExportError(MigratorError):
    """User has no exportable calendars."""

    pass


class InvalidDataError(CalendarError):
    """iCalendar data failed validation or was rejected by the store."""

    pass


class ParseError(InvalidDataError):
    """Artifact bytes could not be read or parsed as iCalendar."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class StoreError(CalendarError):
    """Base exception for calendar store operations."""

    pass


class CalendarExistsError(StoreError):
    """A calendar with the requested uri already exists for the principal."""

    pass


class CalendarNotFoundError(StoreError):
    """Calendar not found."""

    pass
