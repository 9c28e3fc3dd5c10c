"""
Info command - display header and track summary.
"""

from dataclasses import asdict
from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_track_info
from cli.loader import load_track
from smfnotes.formats.smf.reader import SMFReader
from smfnotes.models.track import Track

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file to analyze (.mid)"),
    structure: bool = typer.Option(False, "--structure", "-s", help="Show raw chunk layout"),
    zero_velocity_off: bool = typer.Option(
        False, "--zero-velocity-off", "-z", help="Treat note-on with velocity 0 as note-off"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """
    Display MIDI file information.

    Shows:

    - Header format, track count and division
    - Track name, tempo and time signature
    - Note count, pitch range and duration

    Examples:

        smfnotes info song.mid           # Summary
        smfnotes info song.mid --json    # JSON output
    """
    reader, track = load_track(file, zero_velocity_off)

    if json_output:
        _output_json(reader, track)
        return

    display_track_info(track, reader.parser, str(file))

    if structure:
        console.print(reader.parser.dump_structure(), markup=False)


def _output_json(reader: SMFReader, track: Track) -> None:
    """Output header and track summary as JSON."""
    parser = reader.parser

    data = {
        "header": asdict(parser.header),
        "track_chunk": {
            "declared_length": parser.track_header.length,
            "decoded_length": parser.bytes_consumed,
        },
        "track": {
            "name": track.name,
            "division": track.division,
            "tempo": track.tempo,
            "tempo_changes": [asdict(t) for t in track.tempo_changes],
            "time_signature": asdict(track.time_signature) if track.time_signature else None,
            "note_count": track.note_count,
            "note_range": list(track.note_range) if track.note_range else None,
            "duration_ticks": track.duration_ticks,
            "duration_seconds": track.ticks_to_seconds(track.duration_ticks),
            "orphan_note_offs": track.orphan_note_offs,
        },
        "event_count": len(parser.events),
    }

    console.print_json(data=data)


if __name__ == "__main__":
    app()
