from pathlib import Path

import pytest

from calmigrate.config import MigratorConfig
from calmigrate.constants import USERS_URI_ROOT
from calmigrate.models.calendar import CalendarProperties
from calmigrate.storage.file_store import FileCalendarStore
from tests.builders import vcalendar, vevent


@pytest.fixture
def config(tmp_path: Path) -> MigratorConfig:
    """Config pointing all paths into a temporary directory."""
    return MigratorConfig(
        store_dir=tmp_path / "store",
        export_dir=tmp_path / "export",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def store(config: MigratorConfig) -> FileCalendarStore:
    """Empty file-backed calendar store."""
    return FileCalendarStore(config.store_dir)


@pytest.fixture
def alice_calendar(store: FileCalendarStore) -> str:
    """Calendar "Work Stuff!" of alice holding two events."""
    storage_id = store.create_calendar(
        USERS_URI_ROOT + "alice",
        "work-stuff",
        CalendarProperties(display_name="Work Stuff!", color="#ff0000", components=["VEVENT"]),
    )
    store.create_object(storage_id, "a.ics", vcalendar(vevent("event-a", "Standup")))
    store.create_object(storage_id, "b.ics", vcalendar(vevent("event-b", "Review")))
    return storage_id
