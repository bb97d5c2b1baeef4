"""Calendar migration: export calendars to ICS files and import them back."""

from calmigrate.config import MigratorConfig
from calmigrate.migration import CalendarExporter, CalendarImporter, CalendarMigrator
from calmigrate.storage import ArtifactFiles, FileCalendarStore

__all__ = [
    "ArtifactFiles",
    "CalendarExporter",
    "CalendarImporter",
    "CalendarMigrator",
    "FileCalendarStore",
    "MigratorConfig",
]
