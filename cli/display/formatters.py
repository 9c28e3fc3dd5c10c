"""
Display formatting utilities for CLI output.

Velocity bars plus time, tempo and pitch range formatting.
"""

from typing import Optional

from smfnotes.utils.note_names import note_number_to_name
from smfnotes.utils.timing import tempo_to_bpm


def velocity_bar(velocity: int, width: int = 10) -> str:
    """
    Render a note velocity as a number followed by a block bar.

    Values outside 0-127 are clamped for the bar only.

    Example:
        velocity_bar(100) == "100 [███████░░░]"
    """
    filled = int(max(0, min(velocity, 127)) * width / 127)
    bar = "█" * filled + "░" * (width - filled)
    return f"{velocity:3d} [{bar}]"


def format_seconds(seconds: float) -> str:
    """Format seconds as m:ss.mmm."""
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}:{rest:06.3f}"


def format_tempo(tempo: Optional[int]) -> str:
    """Format microseconds per quarter note with its BPM."""
    if tempo is None:
        return "[dim]none[/dim]"
    if tempo <= 0:
        return f"[yellow]{tempo} us/qn (unusable)[/yellow]"
    return f"{tempo} us/qn ({tempo_to_bpm(tempo):.2f} BPM)"


def format_range(low: int, high: int) -> str:
    """Format a note number range with pitch names."""
    return f"{note_number_to_name(low)} ({low}) - {note_number_to_name(high)} ({high})"
