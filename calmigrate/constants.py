"""Shared constants for calendar migration."""

# Principal namespace for user calendars
USERS_URI_ROOT = "principals/users/"

# Artifact and calendar object file extension
FILENAME_EXT = ".ics"

# Default PRODID written into merged exports
DEFAULT_PRODID = "-//calmigrate//calmigrate//EN"

# Calendar-level vendor properties
CALNAME_PROPERTY = "X-WR-CALNAME"
COLOR_PROPERTY = "X-APPLE-CALENDAR-COLOR"

# Components that can be stored as calendar objects
BASE_COMPONENT_TYPES = ("VEVENT", "VTODO", "VJOURNAL")

# Resource type reported by the store for true calendars
CALENDAR_RESOURCE_TYPE = "calendar"
