"""Calendar store models with Pydantic v2 validation."""

from pydantic import BaseModel, Field, computed_field, field_validator

from calmigrate.constants import CALENDAR_RESOURCE_TYPE


def _dedupe_components(value: list[str]) -> list[str]:
    """Upper-case and de-duplicate component names, keeping first-seen order."""
    return list(dict.fromkeys(name.upper() for name in value))


class CalendarProperties(BaseModel):
    """Calendar-level properties resolved for a calendar path."""

    resource_type: str = CALENDAR_RESOURCE_TYPE
    display_name: str = ""
    color: str | None = None
    components: list[str] = Field(default_factory=list)
    sync_token: str | None = None

    @field_validator("components")
    @classmethod
    def normalize_components(cls, v: list[str]) -> list[str]:
        return _dedupe_components(v)

    @computed_field
    @property
    def is_calendar(self) -> bool:
        """True if the resource is a real calendar collection."""
        return self.resource_type == CALENDAR_RESOURCE_TYPE


class CalendarDescriptor(BaseModel):
    """A calendar container owned by a principal.

    The uri is unique per principal; display_name is free text.
    """

    storage_id: str
    principal: str
    uri: str
    display_name: str = ""
    color: str | None = None
    components: list[str] = Field(default_factory=list)

    @field_validator("components")
    @classmethod
    def normalize_components(cls, v: list[str]) -> list[str]:
        return _dedupe_components(v)


class CalendarObjectBlob(BaseModel):
    """One stored calendar object resource (a single base component)."""

    href: str
    calendar_data: str

    class Config:
        """Pydantic config."""

        frozen = True
