"""Base protocol for calendar stores."""

from typing import Protocol

from calmigrate.models.calendar import (
    CalendarDescriptor,
    CalendarObjectBlob,
    CalendarProperties,
)


class CalendarStore(Protocol):
    """Protocol for the calendar storage collaborator.

    Implementations own atomicity of the individual create/delete calls and
    must enforce uri uniqueness per principal in create_calendar.
    """

    def list_calendars(self, principal: str) -> list[CalendarDescriptor]:
        """List calendars owned by principal."""
        ...

    def get_calendar_properties(self, storage_id: str) -> CalendarProperties | None:
        """Resolve calendar properties, or None if the calendar does not exist."""
        ...

    def list_objects(self, storage_id: str) -> list[CalendarObjectBlob]:
        """List calendar objects in a stable order."""
        ...

    def create_calendar(
        self, principal: str, uri: str, properties: CalendarProperties
    ) -> str:
        """Create a calendar and return its storage id.

        Raises CalendarExistsError if uri is already taken for principal.
        """
        ...

    def create_object(self, storage_id: str, name: str, calendar_data: str) -> None:
        """Store one calendar object.

        Raises InvalidDataError if calendar_data is malformed.
        """
        ...

    def delete_calendar(self, storage_id: str, cascade: bool = True) -> None:
        """Delete a calendar, and its objects when cascade is set."""
        ...
