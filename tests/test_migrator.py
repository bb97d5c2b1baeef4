"""Tests for the calendar migrator facade and artifact files."""

from datetime import date
from pathlib import Path

import pytest

from calmigrate.constants import USERS_URI_ROOT
from calmigrate.exceptions import MigratorError, NothingToExportError, ParseError
from calmigrate.migration.migrator import CalendarMigrator
from calmigrate.models.artifact import ExportArtifact
from calmigrate.storage.artifact_files import ArtifactFiles


@pytest.fixture
def migrator(store, config) -> CalendarMigrator:
    return CalendarMigrator(store, config=config)


def test_export_writes_files(migrator, config, alice_calendar):
    """Test export writes artifacts into the destination directory."""
    paths = migrator.export("alice", config.export_dir, date(2024, 5, 1))

    assert paths == [config.export_dir / "Work Stuff-2024-05-01.ics"]
    assert b"X-WR-CALNAME:Work Stuff!" in paths[0].read_bytes()


def test_export_nothing_writes_nothing(migrator, config):
    """Test an empty export fails before touching the filesystem."""
    with pytest.raises(NothingToExportError):
        migrator.export("bob", config.export_dir)
    assert not config.export_dir.exists()


def test_import_file(migrator, store, config, alice_calendar):
    """Test an exported file imports for another user."""
    (path,) = migrator.export("alice", config.export_dir, date(2024, 5, 1))

    descriptor = migrator.import_file("bob", path)

    assert descriptor.uri == "Work Stuff"
    assert [c.uri for c in store.list_calendars(USERS_URI_ROOT + "bob")] == ["Work Stuff"]


def test_import_missing_file(migrator, tmp_path):
    """Test unreadable files raise ParseError naming the file."""
    path = tmp_path / "missing-2024-05-01.ics"
    with pytest.raises(ParseError) as exc_info:
        migrator.import_file("alice", path)
    assert exc_info.value.source == str(path)


def test_write_failure(tmp_path: Path):
    """Test write failures raise MigratorError naming the artifact."""
    dest = tmp_path / "not-a-dir"
    dest.write_text("occupied")
    artifact = ExportArtifact(name="Work-2024-05-01.ics", data=b"BEGIN:VCALENDAR\r\n")

    with pytest.raises(MigratorError) as exc_info:
        ArtifactFiles().write(artifact, dest)

    assert exc_info.value.calendar == "Work-2024-05-01.ics"


def test_write_and_read(tmp_path: Path):
    """Test artifacts are written byte for byte."""
    artifact = ExportArtifact(name="Work-2024-05-01.ics", data=b"BEGIN:VCALENDAR\r\n")
    files = ArtifactFiles()

    path = files.write(artifact, tmp_path / "out")

    assert path.name == "Work-2024-05-01.ics"
    assert files.read(path) == artifact.data
