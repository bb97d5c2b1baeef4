"""Tests for iCalendar parsing and validation."""

import pytest

from calmigrate.exceptions import InvalidDataError, ParseError
from calmigrate.ingestion.ics_parser import parse_calendar, validate_calendar
from tests.builders import vcalendar, vevent, vtodo


def test_parse_calendar():
    """Test parsing a simple calendar."""
    cal = parse_calendar(vcalendar(vevent("a")).encode("utf-8"))
    assert cal.name == "VCALENDAR"
    assert [c.name for c in cal.subcomponents] == ["VEVENT"]


def test_parse_calendar_forgiving_tolerates_bom_and_blank_lines():
    """Forgiving mode drops a byte order mark and blank lines."""
    text = vcalendar(vevent("a")).replace("BEGIN:VEVENT\n", "\nBEGIN:VEVENT\n\n")
    cal = parse_calendar(b"\xef\xbb\xbf" + text.encode("utf-8"))
    assert len(cal.subcomponents) == 1


def test_parse_calendar_forgiving_replaces_undecodable_bytes():
    """Forgiving mode replaces bytes that are not UTF-8."""
    data = vcalendar(vevent("a", summary="Caf\xe9")).encode("latin-1")
    cal = parse_calendar(data)
    assert "Caf" in str(cal.subcomponents[0]["SUMMARY"])


def test_parse_calendar_strict_rejects_undecodable_bytes():
    """Strict mode refuses bytes that are not UTF-8."""
    data = vcalendar(vevent("a", summary="Caf\xe9")).encode("latin-1")
    with pytest.raises(ParseError, match="decode"):
        parse_calendar(data, forgiving=False, source="cafe.ics")


def test_parse_calendar_missing_end():
    """A calendar without END:VCALENDAR cannot be parsed."""
    text = vcalendar(vevent("a")).replace("END:VCALENDAR\n", "")
    with pytest.raises(ParseError) as exc_info:
        parse_calendar(text.encode("utf-8"), source="broken.ics")

    assert exc_info.value.source == "broken.ics"
    assert "broken.ics" in str(exc_info.value)
    assert isinstance(exc_info.value, InvalidDataError)


def test_parse_calendar_empty():
    """Empty data is a parse error."""
    with pytest.raises(ParseError, match="No iCalendar data"):
        parse_calendar(b"  \n\n")


def test_validate_calendar_valid():
    """A well-formed calendar has no problems."""
    cal = parse_calendar(vcalendar(vevent("a"), vtodo("b")))
    assert validate_calendar(cal) == []


def test_validate_calendar_missing_version_and_prodid():
    """VERSION and PRODID are required."""
    text = "BEGIN:VCALENDAR\n" + vevent("a") + "END:VCALENDAR\n"
    problems = validate_calendar(parse_calendar(text))
    assert "VCALENDAR is missing VERSION" in problems
    assert "VCALENDAR is missing PRODID" in problems


def test_validate_calendar_wrong_version():
    """Only iCalendar 2.0 is accepted."""
    text = vcalendar(vevent("a")).replace("VERSION:2.0", "VERSION:1.0")
    problems = validate_calendar(parse_calendar(text))
    assert any("VERSION 1.0" in problem for problem in problems)


def test_validate_calendar_not_a_vcalendar():
    """A bare component is not a calendar."""
    problems = validate_calendar(parse_calendar(vevent("a")))
    assert problems == ["Top-level component must be VCALENDAR, got VEVENT"]


def test_validate_calendar_component_requirements():
    """Base components need UID and DTSTAMP, events need DTSTART."""
    event = "BEGIN:VEVENT\nSUMMARY:No identity\nEND:VEVENT\n"
    problems = validate_calendar(parse_calendar(vcalendar(event)))
    assert "VEVENT is missing UID" in problems
    assert "VEVENT is missing DTSTAMP" in problems
    assert "VEVENT is missing DTSTART" in problems


def test_validate_calendar_end_and_duration():
    """DTEND and DURATION are mutually exclusive."""
    event = vevent("a", extra="DTEND:20240501T100000Z\n")
    problems = validate_calendar(parse_calendar(vcalendar(event)))
    assert problems == ["VEVENT a must not have both DTEND and DURATION"]


def test_validate_calendar_reports_broken_properties():
    """Property values icalendar could not parse are reported."""
    event = vevent("a", dtstart="DTSTART:not-a-date")
    problems = validate_calendar(parse_calendar(vcalendar(event)))
    assert any("DTSTART" in problem for problem in problems)
