"""
Scan command - decode every MIDI file in a directory.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.formatters import format_range
from cli.display.tables import display_scan
from smfnotes.config import DecoderConfig
from smfnotes.errors import SMFError
from smfnotes.formats.smf.reader import SMFReader
from smfnotes.models.track import note_range

console = Console()
app = typer.Typer()


@app.command()
def scan(
    directory: Path = typer.Argument(..., help="Directory containing .mid files"),
    zero_velocity_off: bool = typer.Option(
        False, "--zero-velocity-off", "-z", help="Treat note-on with velocity 0 as note-off"
    ),
) -> None:
    """
    Decode all MIDI files in a directory and summarize them.

    Files that fail to decode are listed with their error; the scan
    continues with the next file.

    Examples:

        smfnotes scan ./stems
    """
    config = DecoderConfig(note_on_zero_velocity_as_off=zero_velocity_off)

    try:
        paths = SMFReader.list_files(directory, config)
    except NotADirectoryError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not paths:
        console.print(f"[yellow]No MIDI files found in {escape(str(directory))}[/yellow]")
        return

    results = []
    tracks = []
    for path in paths:
        try:
            track = SMFReader.read(path, config)
        except SMFError as e:
            results.append((path.name, None, f"{type(e).__name__}: {e}"))
            continue
        results.append((path.name, track, None))
        tracks.append(track)

    display_scan(results)

    failed = len(results) - len(tracks)
    console.print(f"[bold]{len(tracks)}[/bold] decoded, [bold]{failed}[/bold] failed")

    overall = note_range(tracks)
    if overall:
        console.print(f"[bold]Overall pitch range:[/bold] {format_range(*overall)}")


if __name__ == "__main__":
    app()
