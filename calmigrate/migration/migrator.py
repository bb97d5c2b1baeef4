"""Calendar migrator combining export, import and artifact files."""

import logging
from datetime import date
from pathlib import Path

from calmigrate.config import MigratorConfig
from calmigrate.migration.exporter import CalendarExporter
from calmigrate.migration.importer import CalendarImporter
from calmigrate.models.calendar import CalendarDescriptor
from calmigrate.storage.artifact_files import ArtifactFiles
from calmigrate.storage.base import CalendarStore


class CalendarMigrator:
    """Exports a user's calendars to files and imports them back."""

    def __init__(
        self,
        store: CalendarStore,
        files: ArtifactFiles | None = None,
        config: MigratorConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or MigratorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.files = files or ArtifactFiles()
        self.exporter = CalendarExporter(store, self.config, self.logger)
        self.importer = CalendarImporter(store, self.config, self.logger)

    def export(
        self, user_id: str, dest_dir: Path, export_date: date | None = None
    ) -> list[Path]:
        """
        Export all calendars of a user into dest_dir.

        Returns:
            Paths of the written artifacts

        Raises:
            NothingToExportError: If the user has no exportable calendars
            MigratorError: If a calendar could not be exported or written
        """
        artifacts = self.exporter.export_user(user_id, export_date)
        paths = [self.files.write(artifact, dest_dir) for artifact in artifacts]
        self.logger.info(f"Exported {len(paths)} calendars of <{user_id}> into {dest_dir}")
        return paths

    def import_file(self, user_id: str, path: Path) -> CalendarDescriptor:
        """
        Import one artifact file as a new calendar of a user.

        Raises:
            ParseError: If the file cannot be read or parsed
            InvalidDataError: If the calendar data is invalid
            MigratorError: If no free calendar uri could be claimed
        """
        data = self.files.read(path)
        return self.importer.import_artifact(user_id, path.name, data)
