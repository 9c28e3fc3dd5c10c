"""
Shared file loading for CLI commands.
"""

from pathlib import Path
from typing import Tuple

import typer
from rich.console import Console
from rich.markup import escape

from smfnotes.config import DecoderConfig
from smfnotes.errors import SMFError
from smfnotes.formats.smf.reader import SMFReader
from smfnotes.models.track import Track

console = Console()


def load_track(filepath: Path, zero_velocity_off: bool = False) -> Tuple[SMFReader, Track]:
    """
    Decode a file for display, exiting with status 1 on failure.

    Returns:
        The reader (for header and raw events) and the decoded Track
    """
    config = DecoderConfig(note_on_zero_velocity_as_off=zero_velocity_off)
    reader = SMFReader(config)

    try:
        track = reader.parse_file(filepath)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except SMFError as e:
        console.print(f"[red]Decode error ({type(e).__name__}):[/red] {escape(str(e))}")
        raise typer.Exit(1)

    return reader, track
