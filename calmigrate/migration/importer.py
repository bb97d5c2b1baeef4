"""Import orchestration: one artifact into one new calendar."""

import logging
import uuid

from calmigrate.config import MigratorConfig
from calmigrate.constants import USERS_URI_ROOT
from calmigrate.exceptions import CalendarExistsError, InvalidDataError, MigratorError
from calmigrate.ingestion.ics_parser import parse_calendar, validate_calendar
from calmigrate.ingestion.ics_splitter import ICSSplitter, SplitCalendar
from calmigrate.models.artifact import ImportSpecification
from calmigrate.models.calendar import CalendarDescriptor, CalendarProperties
from calmigrate.naming import resolve_unique_name, uri_seed_from_filename
from calmigrate.storage.base import CalendarStore


class CalendarImporter:
    """Imports a merged ICS artifact as a new calendar of a user.

    Import is all-or-nothing per calendar: if any object is rejected by the
    store, the freshly created calendar is deleted again.
    """

    def __init__(
        self,
        store: CalendarStore,
        config: MigratorConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize importer.

        Args:
            store: Calendar store (dependency injection)
            config: Migration config (defaults to MigratorConfig())
            logger: Logger to report progress on (defaults to module logger)
        """
        self.store = store
        self.config = config or MigratorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.splitter = ICSSplitter()

    def prepare(self, filename: str, data: bytes) -> ImportSpecification:
        """
        Parse and validate artifact bytes.

        Raises:
            ParseError: If data cannot be parsed at all
            InvalidDataError: If the calendar fails validation or the
                filename does not carry a calendar name
        """
        document = parse_calendar(data, forgiving=True, source=filename)

        problems = validate_calendar(document)
        if problems:
            for problem in problems:
                self.logger.debug(f"{filename}: {problem}")
            raise InvalidDataError(
                f"Invalid iCalendar data in {filename}: {'; '.join(problems)}"
            )

        return ImportSpecification(
            desired_uri=uri_seed_from_filename(filename, self.config.file_extension),
            document=document,
        )

    def import_artifact(self, user_id: str, filename: str, data: bytes) -> CalendarDescriptor:
        """
        Import an artifact as a new calendar.

        Args:
            user_id: User receiving the calendar
            filename: Artifact filename ("<calendar_name>-YYYY-MM-DD.ics")
            data: Artifact bytes

        Returns:
            Descriptor of the created calendar

        Raises:
            ParseError: If data cannot be parsed at all
            InvalidDataError: If data is invalid (nothing is created) or an
                object was rejected (the calendar is rolled back)
            MigratorError: If no free calendar uri could be claimed
        """
        spec = self.prepare(filename, data)
        principal = USERS_URI_ROOT + user_id
        split = self.splitter.split(spec.document)

        properties = CalendarProperties(
            display_name=split.display_name,
            color=split.color or None,
            components=split.component_types,
        )
        storage_id, uri = self._create_calendar(principal, spec.desired_uri, properties)

        self._create_objects(storage_id, split)

        self.logger.info(
            f"Imported calendar {filename} to account of <{user_id}> as '{uri}' "
            f"({len(split.base_components)} objects)"
        )
        return CalendarDescriptor(
            storage_id=storage_id,
            principal=principal,
            uri=uri,
            display_name=properties.display_name,
            color=properties.color,
            components=properties.components,
        )

    def _create_calendar(
        self, principal: str, desired_uri: str, properties: CalendarProperties
    ) -> tuple[str, str]:
        """Claim a free uri and create the calendar, retrying on lost races.

        Uris refused by the store stay excluded for later attempts, even when
        the store's listing does not show them.
        """
        taken: set[str] = set()
        for attempt in range(1, self.config.max_name_attempts + 1):
            existing = {calendar.uri for calendar in self.store.list_calendars(principal)}
            uri = resolve_unique_name(desired_uri, existing | taken)
            try:
                return self.store.create_calendar(principal, uri, properties), uri
            except CalendarExistsError:
                taken.add(uri)
                self.logger.warning(
                    f"Calendar uri '{uri}' was taken concurrently "
                    f"(attempt {attempt}/{self.config.max_name_attempts})"
                )

        raise MigratorError(
            f"Could not claim a calendar uri for '{desired_uri}' after "
            f"{self.config.max_name_attempts} attempts",
            calendar=desired_uri,
        )

    def _create_objects(self, storage_id: str, split: SplitCalendar) -> None:
        """Create one object per base component, rolling back on rejected data."""
        for component in split.base_components:
            name = f"{uuid.uuid4()}{self.config.file_extension}"
            try:
                self.store.create_object(storage_id, name, split.object_text(component))
            except InvalidDataError as e:
                self.logger.error(
                    f"Calendar object {component.get('UID', name)} was rejected, "
                    f"rolling back calendar {storage_id}: {e}"
                )
                try:
                    self.rollback(storage_id)
                except Exception as rollback_error:
                    self.logger.error(
                        f"Rollback of calendar {storage_id} failed: {rollback_error}"
                    )
                raise

    def rollback(self, storage_id: str) -> None:
        """Delete a partially imported calendar together with its objects."""
        self.store.delete_calendar(storage_id, cascade=True)
        self.logger.info(f"Rolled back calendar {storage_id}")
