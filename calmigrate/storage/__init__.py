"""Storage layer for calendars and export artifacts."""

from calmigrate.storage.artifact_files import ArtifactFiles
from calmigrate.storage.base import CalendarStore
from calmigrate.storage.file_store import FileCalendarStore

__all__ = [
    "ArtifactFiles",
    "CalendarStore",
    "FileCalendarStore",
]
