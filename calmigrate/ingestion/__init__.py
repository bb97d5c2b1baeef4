"""Ingestion layer for imported calendar documents."""

from calmigrate.ingestion.ics_parser import parse_calendar, validate_calendar
from calmigrate.ingestion.ics_splitter import ICSSplitter, SplitCalendar

__all__ = [
    "ICSSplitter",
    "SplitCalendar",
    "parse_calendar",
    "validate_calendar",
]
