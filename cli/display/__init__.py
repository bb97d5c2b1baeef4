"""Display module for rendering CLI output.

This module provides:
- console: Shared Rich console instance
- TableRenderer: Calendar list tables
"""

from cli.display.console import console
from cli.display.table_renderer import CalendarInfo, TableRenderer

__all__ = [
    "console",
    "TableRenderer",
    "CalendarInfo",
]
