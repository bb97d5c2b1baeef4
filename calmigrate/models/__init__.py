"""Pydantic models for calendar migration."""

from calmigrate.models.artifact import ExportArtifact, ImportSpecification
from calmigrate.models.calendar import (
    CalendarDescriptor,
    CalendarObjectBlob,
    CalendarProperties,
)

__all__ = [
    "CalendarDescriptor",
    "CalendarObjectBlob",
    "CalendarProperties",
    "ExportArtifact",
    "ImportSpecification",
]
