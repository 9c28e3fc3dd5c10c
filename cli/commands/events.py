"""
Events command - dump the raw decoded event stream.
"""

from pathlib import Path
from typing import Optional

import typer

from cli.display.tables import display_events
from cli.loader import load_track

app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MIDI file to analyze (.mid)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show at most N events"),
    zero_velocity_off: bool = typer.Option(
        False, "--zero-velocity-off", "-z", help="Treat note-on with velocity 0 as note-off"
    ),
) -> None:
    """
    Dump every decoded event with its delta-time and absolute tick.

    Examples:

        smfnotes events song.mid
        smfnotes events song.mid --limit 50
    """
    reader, _ = load_track(file, zero_velocity_off)

    display_events(reader.parser.events, limit=limit)


if __name__ == "__main__":
    app()
