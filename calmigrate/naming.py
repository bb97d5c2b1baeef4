"""Calendar naming: unique uris and artifact filenames."""

import re
from collections.abc import Collection
from datetime import date

from calmigrate.constants import FILENAME_EXT
from calmigrate.exceptions import InvalidDataError

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\-_ ]")


def resolve_unique_name(desired: str, existing: Collection[str]) -> str:
    """
    Return a name not present in existing by suffixing "-1", "-2", ...

    If desired is free it is returned unchanged. Comparison is exact
    (case-sensitive); existing is only read.

    Args:
        desired: Preferred name
        existing: Names already in use

    Returns:
        First free name of desired, desired-1, desired-2, ...
    """
    candidate = desired
    counter = 1
    while candidate in existing:
        candidate = f"{desired}-{counter}"
        counter += 1
    return candidate


def sanitize_filename(name: str) -> str:
    """Strip everything except letters, digits, hyphens, underscores and spaces."""
    return _UNSAFE_CHARS.sub("", name)


def artifact_filename(name: str, export_date: date, ext: str = FILENAME_EXT) -> str:
    """Build "<sanitized-name>-<YYYY-MM-DD><ext>"."""
    return f"{sanitize_filename(name)}-{export_date.isoformat()}{ext}"


def uri_seed_from_filename(filename: str, ext: str = FILENAME_EXT) -> str:
    """
    Recover the calendar uri seed from an artifact filename.

    "work-stuff-2024-05-01.ics" gives "work-stuff". Filenames without a date
    suffix are split on the first hyphen; without any hyphen the extension is
    dropped.

    Raises:
        InvalidDataError: If no calendar name can be recovered
    """
    date_suffix = re.compile(r"-\d{4}-\d{2}-\d{2}" + re.escape(ext) + r"$", re.IGNORECASE)
    match = date_suffix.search(filename)
    if match:
        seed = filename[: match.start()]
    elif "-" in filename:
        seed = filename.split("-", 1)[0]
    elif ext and filename.lower().endswith(ext.lower()):
        seed = filename[: -len(ext)]
    else:
        seed = filename

    if not seed.strip():
        raise InvalidDataError(
            f'Invalid filename "{filename}", filename must be of the format: '
            f'"<calendar_name>-YYYY-MM-DD{ext}"'
        )
    return seed
