"""Migration layer: calendar export and import orchestration."""

from calmigrate.migration.exporter import CalendarExporter
from calmigrate.migration.importer import CalendarImporter
from calmigrate.migration.migrator import CalendarMigrator

__all__ = [
    "CalendarExporter",
    "CalendarImporter",
    "CalendarMigrator",
]
