"""Tests for the ICS merger."""

import pytest
from icalendar import Calendar

from calmigrate.exceptions import InvalidCalendarError
from calmigrate.models.calendar import CalendarProperties
from calmigrate.output.ics_merger import ICSMerger
from tests.builders import BERLIN_VTIMEZONE, vcalendar, vevent, vtodo


def test_merge_strips_envelopes_and_keeps_order():
    """Base components are merged in the given order without their envelopes."""
    blobs = {
        "b.ics": vcalendar(vevent("event-b", "Second")),
        "a.ics": vcalendar(vevent("event-a", "First")),
        "c.ics": vcalendar(vtodo("todo-c")),
    }
    properties = CalendarProperties(display_name="Work Stuff!", color="#ff0000")

    merged = ICSMerger().merge(properties, blobs)

    assert merged.name == "VCALENDAR"
    assert [str(c["UID"]) for c in merged.subcomponents] == ["event-b", "event-a", "todo-c"]
    assert str(merged["X-WR-CALNAME"]) == "Work Stuff!"
    assert str(merged["X-APPLE-CALENDAR-COLOR"]) == "#ff0000"
    assert str(merged["VERSION"]) == "2.0"


def test_merge_serializes_single_document():
    """The serialized merge holds exactly one VCALENDAR."""
    blobs = {
        "a.ics": vcalendar(vevent("event-a")),
        "b.ics": vcalendar(vevent("event-b")),
    }
    merger = ICSMerger(prodid="-//Acme//Export//EN")
    data = merger.serialize(merger.merge(CalendarProperties(display_name="Work"), blobs))

    assert data.count(b"BEGIN:VCALENDAR") == 1
    assert data.count(b"BEGIN:VEVENT") == 2
    assert b"PRODID:-//Acme//Export//EN" in data
    assert b"X-APPLE-CALENDAR-COLOR" not in data


def test_merge_deduplicates_timezones():
    """VTIMEZONEs are emitted once per TZID, ahead of base components."""
    dtstart = "DTSTART;TZID=Europe/Berlin:20240501T090000"
    blobs = {
        "a.ics": vcalendar(BERLIN_VTIMEZONE, vevent("event-a", dtstart=dtstart)),
        "b.ics": vcalendar(BERLIN_VTIMEZONE, vevent("event-b", dtstart=dtstart)),
    }

    merged = ICSMerger().merge(CalendarProperties(display_name="Berlin"), blobs)

    assert [c.name for c in merged.subcomponents] == ["VTIMEZONE", "VEVENT", "VEVENT"]


def test_merge_skips_malformed_and_missing_blobs():
    """Unparseable, missing and non-VCALENDAR blobs are skipped."""
    blobs = {
        "broken.ics": "BEGIN:VCALENDAR\nBEGIN:VEVENT\nUID:x\nEND:VEVENT\n",
        "missing.ics": None,
        "bare.ics": vevent("bare"),
        "good.ics": vcalendar(vevent("good")),
    }

    merged = ICSMerger().merge(CalendarProperties(display_name="Work"), blobs)

    assert [str(c["UID"]) for c in merged.subcomponents] == ["good"]


def test_merge_skips_unknown_components():
    """Only events, todos, journals and timezones are merged."""
    freebusy = "BEGIN:VFREEBUSY\nUID:fb\nDTSTAMP:20240401T120000Z\nEND:VFREEBUSY\n"
    blobs = {"a.ics": vcalendar(freebusy, vevent("event-a"))}

    merged = ICSMerger().merge(CalendarProperties(display_name="Work"), blobs)

    assert [c.name for c in merged.subcomponents] == ["VEVENT"]


def test_merge_empty_calendar():
    """A calendar without objects still merges to a valid document."""
    merger = ICSMerger()
    data = merger.serialize(merger.merge(CalendarProperties(display_name="Empty"), {}))

    cal = Calendar.from_ical(data)
    assert cal.subcomponents == []
    assert str(cal["X-WR-CALNAME"]) == "Empty"


def test_merge_unresolved_properties():
    """Missing properties mean the calendar is gone."""
    with pytest.raises(InvalidCalendarError):
        ICSMerger().merge(None, {})


def test_merge_not_a_calendar():
    """Non-calendar resources cannot be merged."""
    properties = CalendarProperties(resource_type="subscription", display_name="Feed")
    with pytest.raises(InvalidCalendarError, match="subscription"):
        ICSMerger().merge(properties, {})
