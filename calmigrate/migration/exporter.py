"""Export orchestration: one artifact per calendar of a user."""

import logging
from datetime import date

from calmigrate.config import MigratorConfig
from calmigrate.constants import USERS_URI_ROOT
from calmigrate.exceptions import (
    CalendarNotFoundError,
    InvalidCalendarError,
    MigratorError,
    NothingToExportError,
)
from calmigrate.models.artifact import ExportArtifact
from calmigrate.models.calendar import CalendarDescriptor, CalendarProperties
from calmigrate.naming import artifact_filename, resolve_unique_name, sanitize_filename
from calmigrate.output.ics_merger import ICSMerger
from calmigrate.storage.base import CalendarStore


class CalendarExporter:
    """Exports every calendar of a user as a merged ICS artifact."""

    def __init__(
        self,
        store: CalendarStore,
        config: MigratorConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize exporter.

        Args:
            store: Calendar store (dependency injection)
            config: Migration config (defaults to MigratorConfig())
            logger: Logger to report progress on (defaults to module logger)
        """
        self.store = store
        self.config = config or MigratorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.merger = ICSMerger(prodid=self.config.prodid)

    def export_user(
        self, user_id: str, export_date: date | None = None
    ) -> list[ExportArtifact]:
        """
        Export all calendars of a user.

        Calendars that turn out not to be calendars (deleted meanwhile, wrong
        resource type) are left out. Any other failure aborts the whole
        export so that no silently incomplete result is produced.

        Args:
            user_id: User whose calendars to export
            export_date: Date used in artifact names (defaults to today)

        Returns:
            One artifact per exportable calendar, in store order

        Raises:
            NothingToExportError: If the user has no exportable calendars
            MigratorError: If calendars could not be listed or a calendar
                could not be exported
        """
        principal = USERS_URI_ROOT + user_id
        export_date = export_date or date.today()

        artifacts = []
        used_names: set[str] = set()

        try:
            calendars = self.store.list_calendars(principal)
        except Exception as e:
            raise MigratorError(f"Failed to list calendars of <{user_id}>: {e}") from e

        for calendar in calendars:
            try:
                artifact = self.export_calendar(calendar, export_date, used_names)
            except InvalidCalendarError as e:
                # Invalid (e.g. deleted) calendars are not to be exported
                self.logger.debug(f"Skipping calendar '{calendar.uri}' of <{user_id}>: {e}")
                continue

            artifacts.append(artifact)
            self.logger.info(f"Exported calendar '{calendar.uri}' of <{user_id}> as {artifact.name}")

        if not artifacts:
            raise NothingToExportError(f"User <{user_id}> has no calendars to export")

        return artifacts

    def export_calendar(
        self,
        calendar: CalendarDescriptor,
        export_date: date,
        used_names: set[str] | None = None,
    ) -> ExportArtifact:
        """
        Export a single calendar.

        Args:
            calendar: Calendar to export
            export_date: Date used in the artifact name
            used_names: Sanitized names already taken in this run, updated
                with the name chosen for this calendar

        Raises:
            InvalidCalendarError: If the calendar is not a valid calendar
            MigratorError: On any other failure, naming the calendar
        """
        properties = self._resolve_properties(calendar)

        try:
            blobs = {
                blob.href: blob.calendar_data
                for blob in self.store.list_objects(calendar.storage_id)
            }
            merged = self.merger.merge(properties, blobs)
            data = self.merger.serialize(merged)
        except InvalidCalendarError:
            raise
        except CalendarNotFoundError as e:
            # Deleted between listing and reading its objects
            raise InvalidCalendarError(f"Calendar '{calendar.uri}' no longer exists") from e
        except Exception as e:
            raise MigratorError(
                f"Failed to export calendar '{calendar.uri}' ({calendar.storage_id}): {e}",
                calendar=calendar.uri,
            ) from e

        # Fall back to the uri when the display name sanitizes to nothing
        base_name = sanitize_filename(properties.display_name)
        if not base_name.strip():
            base_name = sanitize_filename(calendar.uri)
        if not base_name.strip():
            base_name = "calendar"

        if used_names is not None:
            base_name = resolve_unique_name(base_name, used_names)
            used_names.add(base_name)

        return ExportArtifact(
            name=artifact_filename(base_name, export_date, self.config.file_extension),
            data=data,
        )

    def _resolve_properties(self, calendar: CalendarDescriptor) -> CalendarProperties:
        """Resolve calendar properties, separating invalid calendars from failures."""
        try:
            properties = self.store.get_calendar_properties(calendar.storage_id)
        except Exception as e:
            raise MigratorError(
                f"Failed to resolve calendar '{calendar.uri}' ({calendar.storage_id}): {e}",
                calendar=calendar.uri,
            ) from e

        # Filter out invalid (e.g. deleted) calendars
        if properties is None:
            raise InvalidCalendarError(f"Calendar '{calendar.uri}' no longer exists")
        if not properties.is_calendar:
            raise InvalidCalendarError(
                f"'{calendar.uri}' is a {properties.resource_type}, not a calendar"
            )
        return properties
