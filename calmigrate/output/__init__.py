"""Output layer for merged calendar exports."""

from calmigrate.output.ics_merger import ICSMerger

__all__ = [
    "ICSMerger",
]
