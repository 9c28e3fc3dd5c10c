"""
CLI display modules.
"""

from cli.display.tables import (
    display_events,
    display_notes,
    display_scan,
    display_track_info,
)

__all__ = [
    "display_events",
    "display_notes",
    "display_scan",
    "display_track_info",
]
