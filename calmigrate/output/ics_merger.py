"""ICS merger for exporting a whole calendar as one document."""

import logging
from collections.abc import Mapping

from icalendar import Calendar

from calmigrate.constants import (
    BASE_COMPONENT_TYPES,
    CALNAME_PROPERTY,
    COLOR_PROPERTY,
    DEFAULT_PRODID,
)
from calmigrate.exceptions import InvalidCalendarError
from calmigrate.models.calendar import CalendarProperties

logger = logging.getLogger(__name__)


class ICSMerger:
    """Merges per-object calendar blobs into a single VCALENDAR."""

    def __init__(self, prodid: str = DEFAULT_PRODID):
        self.prodid = prodid

    def merge(
        self,
        properties: CalendarProperties | None,
        blobs: Mapping[str, str | None],
    ) -> Calendar:
        """Merge calendar objects into one calendar document.

        Each blob is a VCALENDAR envelope around one base component (plus
        its overrides and timezones). Envelopes are stripped; base components
        are appended in the order blobs are given, and VTIMEZONEs are
        emitted once per TZID ahead of them. Blobs that are missing, fail to
        parse or are not VCALENDARs are skipped.

        Args:
            properties: Calendar-level properties resolved for the calendar
            blobs: Mapping of object href to raw calendar data

        Returns:
            Merged calendar

        Raises:
            InvalidCalendarError: If properties are missing or do not
                describe a calendar
        """
        if properties is None or not properties.is_calendar:
            raise InvalidCalendarError(
                "Calendar properties could not be resolved"
                if properties is None
                else f"Resource type '{properties.resource_type}' is not a calendar"
            )

        cal = Calendar()
        cal.add("prodid", self.prodid)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add(CALNAME_PROPERTY, properties.display_name)
        if properties.color:
            cal.add(COLOR_PROPERTY, properties.color)

        timezones = {}
        objects = []

        for href, calendar_data in blobs.items():
            if calendar_data is None:
                logger.debug(f"Skipping {href}: no calendar data")
                continue

            try:
                node = Calendar.from_ical(calendar_data)
            except ValueError as e:
                logger.warning(f"Skipping {href}: failed to parse calendar data ({e})")
                continue

            if node.name != "VCALENDAR":
                logger.warning(f"Skipping {href}: expected VCALENDAR, got {node.name}")
                continue

            for child in node.subcomponents:
                if child.name in BASE_COMPONENT_TYPES:
                    objects.append(child)
                elif child.name == "VTIMEZONE":
                    # Naively just checking tzid
                    timezones.setdefault(str(child.get("TZID", "")), child)
                else:
                    logger.debug(f"Skipping {child.name} component in {href}")

        for timezone in timezones.values():
            cal.add_component(timezone)
        for component in objects:
            cal.add_component(component)

        logger.info(
            f"Merged {len(objects)} components from {len(blobs)} objects "
            f"into calendar '{properties.display_name}'"
        )
        return cal

    def serialize(self, calendar: Calendar) -> bytes:
        """Serialize calendar to UTF-8 iCalendar bytes."""
        ical_content = calendar.to_ical()
        if not ical_content:
            raise ValueError("Calendar.to_ical() returned empty content")
        return ical_content
