"""Filesystem-backed calendar store."""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote

from icalendar import Calendar
from pydantic import BaseModel

from calmigrate.constants import BASE_COMPONENT_TYPES
from calmigrate.exceptions import (
    CalendarExistsError,
    CalendarNotFoundError,
    InvalidDataError,
    StoreError,
)
from calmigrate.models.calendar import (
    CalendarDescriptor,
    CalendarObjectBlob,
    CalendarProperties,
)

logger = logging.getLogger(__name__)


class CalendarRecord(BaseModel):
    """Calendar record stored in calendar.json within each calendar directory."""

    principal: str
    uri: str
    properties: CalendarProperties
    created: datetime


class FileCalendarStore:
    """Calendar store keeping one directory per calendar.

    Layout:
        <root>/<principal>/<uri>/calendar.json
        <root>/<principal>/<uri>/objects/<name>

    Principal and uri are percent-quoted into single path segments; the
    storage id is "<principal>/<uri>" relative to root.
    """

    METADATA_FILENAME = "calendar.json"
    OBJECTS_DIRNAME = "objects"

    def __init__(self, root: Path):
        """
        Initialize store.

        Args:
            root: Base directory for all principals' calendars
        """
        self.root = root

    def _principal_dir(self, principal: str) -> Path:
        return self.root / quote(principal, safe="")

    def _calendar_dir(self, storage_id: str) -> Path | None:
        """Get directory for storage id, or None if the id is malformed."""
        parts = storage_id.split("/")
        if len(parts) != 2 or any(part in ("", ".", "..") for part in parts):
            return None
        return self.root / parts[0] / parts[1]

    def _require_calendar_dir(self, storage_id: str) -> Path:
        calendar_dir = self._calendar_dir(storage_id)
        if calendar_dir is None or not (calendar_dir / self.METADATA_FILENAME).exists():
            raise CalendarNotFoundError(f"Calendar '{storage_id}' not found")
        return calendar_dir

    def _load_record(self, calendar_dir: Path) -> CalendarRecord:
        return CalendarRecord.model_validate_json(
            (calendar_dir / self.METADATA_FILENAME).read_text(encoding="utf-8")
        )

    def list_calendars(self, principal: str) -> list[CalendarDescriptor]:
        """List calendars owned by principal, sorted by uri."""
        principal_dir = self._principal_dir(principal)
        if not principal_dir.exists():
            return []

        calendars = []
        for calendar_dir in sorted(principal_dir.iterdir()):
            if not (calendar_dir / self.METADATA_FILENAME).exists():
                continue
            record = self._load_record(calendar_dir)
            calendars.append(
                CalendarDescriptor(
                    storage_id=f"{principal_dir.name}/{calendar_dir.name}",
                    principal=record.principal,
                    uri=record.uri,
                    display_name=record.properties.display_name,
                    color=record.properties.color,
                    components=record.properties.components,
                )
            )
        return calendars

    def get_calendar_properties(self, storage_id: str) -> CalendarProperties | None:
        """Resolve properties for a calendar, None if it does not exist."""
        calendar_dir = self._calendar_dir(storage_id)
        if calendar_dir is None or not (calendar_dir / self.METADATA_FILENAME).exists():
            return None
        return self._load_record(calendar_dir).properties

    def list_objects(self, storage_id: str) -> list[CalendarObjectBlob]:
        """List calendar objects sorted by name."""
        objects_dir = self._require_calendar_dir(storage_id) / self.OBJECTS_DIRNAME
        if not objects_dir.exists():
            return []
        return [
            CalendarObjectBlob(href=path.name, calendar_data=path.read_text(encoding="utf-8"))
            for path in sorted(objects_dir.iterdir())
            if path.is_file()
        ]

    def create_calendar(
        self, principal: str, uri: str, properties: CalendarProperties
    ) -> str:
        """
        Create a calendar directory and its calendar.json.

        The calendar directory is created exclusively, so two concurrent
        creations of the same uri cannot both succeed.

        Returns:
            Storage id of the new calendar

        Raises:
            CalendarExistsError: If uri is already taken for principal
            StoreError: If uri cannot be used as a calendar name
        """
        if uri.strip() in ("", ".", ".."):
            raise StoreError(f"Invalid calendar uri: '{uri}'")

        principal_dir = self._principal_dir(principal)
        principal_dir.mkdir(parents=True, exist_ok=True)

        calendar_dir = principal_dir / quote(uri, safe="")
        try:
            calendar_dir.mkdir()
        except FileExistsError as e:
            raise CalendarExistsError(
                f"Calendar '{uri}' already exists for {principal}"
            ) from e

        record = CalendarRecord(
            principal=principal,
            uri=uri,
            properties=properties,
            created=datetime.now(),
        )
        try:
            (calendar_dir / self.OBJECTS_DIRNAME).mkdir()
            (calendar_dir / self.METADATA_FILENAME).write_text(
                record.model_dump_json(indent=2), encoding="utf-8"
            )
        except OSError:
            # Never leave a calendar directory without calendar.json
            shutil.rmtree(calendar_dir, ignore_errors=True)
            raise

        storage_id = f"{principal_dir.name}/{calendar_dir.name}"
        logger.info(f"Created calendar '{uri}' for {principal} ({storage_id})")
        return storage_id

    def create_object(self, storage_id: str, name: str, calendar_data: str) -> None:
        """
        Validate and store one calendar object.

        Raises:
            CalendarNotFoundError: If the calendar does not exist
            InvalidDataError: If the object data is malformed
            StoreError: If the object name is invalid or already taken
        """
        calendar_dir = self._require_calendar_dir(storage_id)

        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise StoreError(f"Invalid calendar object name: '{name}'")

        self._validate_object(name, calendar_data)

        path = calendar_dir / self.OBJECTS_DIRNAME / name
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(calendar_data)
        except FileExistsError as e:
            raise StoreError(f"Calendar object '{name}' already exists") from e

        logger.debug(f"Created calendar object {name} in {storage_id}")

    def _validate_object(self, name: str, calendar_data: str) -> None:
        """Check that data is one VCALENDAR holding components of a single UID."""
        try:
            node = Calendar.from_ical(calendar_data)
        except ValueError as e:
            raise InvalidDataError(f"Calendar object {name} is not valid iCalendar: {e}") from e

        if node.name != "VCALENDAR":
            raise InvalidDataError(f"Calendar object {name} must be a VCALENDAR, got {node.name}")

        components = [c for c in node.subcomponents if c.name in BASE_COMPONENT_TYPES]
        if not components:
            raise InvalidDataError(
                f"Calendar object {name} must contain at least one of "
                f"{', '.join(BASE_COMPONENT_TYPES)}"
            )

        uids = {str(c.get("UID")) for c in components}
        if len(uids) > 1:
            raise InvalidDataError(
                f"Calendar object {name} must not contain more than one UID"
            )

    def delete_calendar(self, storage_id: str, cascade: bool = True) -> None:
        """
        Delete a calendar.

        Raises:
            CalendarNotFoundError: If the calendar does not exist
            StoreError: If cascade is off and the calendar still has objects
        """
        calendar_dir = self._require_calendar_dir(storage_id)
        objects_dir = calendar_dir / self.OBJECTS_DIRNAME

        if not cascade and objects_dir.exists() and any(objects_dir.iterdir()):
            raise StoreError(
                f"Calendar '{unquote(calendar_dir.name)}' is not empty, use cascade to delete"
            )

        shutil.rmtree(calendar_dir)
        logger.info(f"Deleted calendar {storage_id}")
