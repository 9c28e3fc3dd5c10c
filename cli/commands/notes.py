"""
Notes command - list reconstructed note intervals.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.tables import display_notes
from cli.loader import load_track

console = Console()
app = typer.Typer()


@app.command()
def notes(
    file: Path = typer.Argument(..., help="MIDI file to analyze (.mid)"),
    tempo: Optional[int] = typer.Option(
        None, "--tempo", "-t", help="Microseconds per quarter note (default: from file, else 500000)"
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show at most N notes"),
    zero_velocity_off: bool = typer.Option(
        False, "--zero-velocity-off", "-z", help="Treat note-on with velocity 0 as note-off"
    ),
) -> None:
    """
    List notes as absolute-tick intervals with start and end times.

    Examples:

        smfnotes notes song.mid
        smfnotes notes song.mid --tempo 375000 --limit 20
    """
    if tempo is not None and tempo <= 0:
        console.print(f"[red]Error: tempo must be positive, got {tempo}[/red]")
        raise typer.Exit(1)

    _, track = load_track(file, zero_velocity_off)

    display_notes(track, tempo=tempo, limit=limit)


if __name__ == "__main__":
    app()
