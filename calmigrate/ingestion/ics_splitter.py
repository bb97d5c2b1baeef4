"""Split a merged calendar document into storable calendar objects."""

import logging
from dataclasses import dataclass, field

from icalendar import Calendar, Component

from calmigrate.constants import CALNAME_PROPERTY, COLOR_PROPERTY

logger = logging.getLogger(__name__)

# Envelope properties copied from the parent document into each object
ENVELOPE_PROPERTIES = ("VERSION", "PRODID", "CALSCALE")


@dataclass
class SplitCalendar:
    """Calendar-level metadata and base components of one VCALENDAR.

    Base components are every direct child except VTIMEZONEs and recurrence
    overrides (components carrying RECURRENCE-ID). Overrides travel with the
    base component sharing their UID.
    """

    name: str = "VCALENDAR"
    display_name: str = ""
    color: str = ""
    component_types: list[str] = field(default_factory=list)
    base_components: list[Component] = field(default_factory=list)
    timezones: dict[str, Component] = field(default_factory=dict)
    overrides: dict[str, list[Component]] = field(default_factory=dict)
    envelope: dict = field(default_factory=dict)

    def object_text(self, component: Component) -> str:
        """
        Render one base component as a standalone calendar object.

        The component is wrapped in its own envelope named after the parent
        calendar, together with its recurrence overrides and the VTIMEZONEs
        it references.
        """
        envelope = Calendar()
        envelope.name = self.name
        for name, value in self.envelope.items():
            envelope[name] = value

        uid = _uid(component)
        members = [component]
        if uid is not None:
            members.extend(
                override
                for override in self.overrides.get(uid, [])
                if override is not component
            )

        for tzid in _referenced_tzids(members):
            if tzid in self.timezones:
                envelope.add_component(self.timezones[tzid])
        for member in members:
            envelope.add_component(member)

        return envelope.to_ical().decode("utf-8")

    def object_texts(self) -> list[str]:
        """Standalone object text for every base component, in document order."""
        return [self.object_text(component) for component in self.base_components]


class ICSSplitter:
    """Splitter for merged ICS calendar documents."""

    def split(self, document: Calendar) -> SplitCalendar:
        """Decompose a parsed VCALENDAR into metadata and base components."""
        result = SplitCalendar(
            name=document.name,
            display_name=str(document.get(CALNAME_PROPERTY, "")),
            color=str(document.get(COLOR_PROPERTY, "")),
            envelope={
                name: document[name] for name in ENVELOPE_PROPERTIES if name in document
            },
        )

        # Ordered set of component type names
        component_types: dict[str, None] = {}

        children = document.subcomponents
        uids_with_master = {
            _uid(child)
            for child in children
            if child.name != "VTIMEZONE"
            and "RECURRENCE-ID" not in child
            and _uid(child) is not None
        }

        for child in children:
            if child.name == "VTIMEZONE":
                tzid = str(child.get("TZID", ""))
                result.timezones.setdefault(tzid, child)
                continue

            component_types.setdefault(child.name, None)

            uid = _uid(child)
            if "RECURRENCE-ID" in child and uid is not None:
                if uid in uids_with_master:
                    result.overrides.setdefault(uid, []).append(child)
                    continue
                # Orphaned override stands in for its missing master
                uids_with_master.add(uid)

            result.base_components.append(child)

        result.component_types = list(component_types)
        logger.debug(
            f"Split calendar '{result.display_name}' into "
            f"{len(result.base_components)} objects ({', '.join(result.component_types)})"
        )
        return result


def _uid(component: Component) -> str | None:
    uid = component.get("UID")
    return str(uid) if uid is not None else None


def _referenced_tzids(components: list[Component]) -> list[str]:
    """TZID parameters used by the components' properties, in first-seen order."""
    tzids: dict[str, None] = {}
    for component in components:
        for _, value in component.property_items(recursive=False):
            params = getattr(value, "params", None)
            if params and "TZID" in params:
                tzids.setdefault(str(params["TZID"]), None)
    return list(tzids)
