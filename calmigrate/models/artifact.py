"""Export artifact and import specification models."""

from dataclasses import dataclass

from icalendar import Calendar
from pydantic import BaseModel


class ExportArtifact(BaseModel):
    """A named, serialized calendar export."""

    name: str
    data: bytes

    class Config:
        """Pydantic config."""

        frozen = True


@dataclass
class ImportSpecification:
    """Parsed artifact plus the uri seed recovered from its filename.

    The uri seed is the artifact filename before the date suffix.
    """

    desired_uri: str
    document: Calendar
