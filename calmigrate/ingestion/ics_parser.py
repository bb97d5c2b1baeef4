"""iCalendar parsing and generic validation."""

import logging
import re

from icalendar import Calendar

from calmigrate.constants import BASE_COMPONENT_TYPES
from calmigrate.exceptions import ParseError

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_calendar(
    data: bytes | str, forgiving: bool = True, source: str | None = None
) -> Calendar:
    """
    Parse raw iCalendar data into an icalendar component tree.

    Forgiving mode tolerates minor non-conformance: undecodable bytes are
    replaced, a byte order mark and blank lines are dropped, and property
    values icalendar cannot parse are recorded on the component instead of
    failing the whole document (they surface later in validate_calendar).

    Args:
        data: Raw bytes or text
        forgiving: Parse in forgiving mode
        source: Path or filename used in error messages

    Returns:
        Parsed top-level component

    Raises:
        ParseError: If data cannot be decoded or parsed at all
    """
    label = source or "<data>"

    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig", errors="replace" if forgiving else "strict")
        except UnicodeDecodeError as e:
            raise ParseError(f"Failed to decode {label} as UTF-8: {e}", source) from e
    else:
        text = data.lstrip("\ufeff")

    if forgiving:
        text = "\r\n".join(line for line in _LINE_BREAK.split(text) if line.strip())

    if not text.strip():
        raise ParseError(f"No iCalendar data in {label}", source)

    try:
        calendar = Calendar.from_ical(text)
    except ValueError as e:
        raise ParseError(f"Failed to parse {label}: {e}", source) from e

    if not forgiving:
        errors = _collect_errors(calendar)
        if errors:
            raise ParseError(f"Failed to parse {label}: {'; '.join(errors)}", source)

    logger.debug(f"Parsed {label} ({len(calendar.subcomponents)} components)")
    return calendar


def validate_calendar(calendar: Calendar) -> list[str]:
    """
    Run generic iCalendar validation.

    Returns:
        List of problem descriptions (empty when the document is valid)
    """
    problems = []

    if calendar.name != "VCALENDAR":
        problems.append(f"Top-level component must be VCALENDAR, got {calendar.name}")
        return problems

    version = calendar.get("VERSION")
    if version is None:
        problems.append("VCALENDAR is missing VERSION")
    elif str(version) != "2.0":
        problems.append(f"Unsupported VERSION {version}, only 2.0 is supported")

    if calendar.get("PRODID") is None:
        problems.append("VCALENDAR is missing PRODID")

    problems.extend(_collect_errors(calendar))

    for component in calendar.subcomponents:
        if component.name not in BASE_COMPONENT_TYPES:
            continue

        uid = component.get("UID")
        label = f"{component.name} {uid}" if uid else component.name

        if uid is None or not str(uid).strip():
            problems.append(f"{label} is missing UID")
        if component.get("DTSTAMP") is None:
            problems.append(f"{label} is missing DTSTAMP")
        if component.name == "VEVENT" and component.get("DTSTART") is None:
            problems.append(f"{label} is missing DTSTART")

        end_property = {"VEVENT": "DTEND", "VTODO": "DUE"}.get(component.name)
        if end_property and end_property in component and "DURATION" in component:
            problems.append(f"{label} must not have both {end_property} and DURATION")

    return problems


def _collect_errors(calendar: Calendar) -> list[str]:
    """Property errors icalendar recorded while parsing."""
    errors = []
    for component in calendar.walk():
        for name, message in getattr(component, "errors", []):
            errors.append(f"{component.name}: invalid {name or 'content line'} ({message})")
    return errors
