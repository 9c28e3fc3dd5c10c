"""
Rich table displays for decoded MIDI files.
"""

from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_range, format_seconds, format_tempo, velocity_bar
from smfnotes.formats.smf.parser import SMFParser
from smfnotes.models.events import ChannelEvent, MetaEvent, RawEvent
from smfnotes.models.track import Track

console = Console()


def display_track_info(track: Track, parser: SMFParser, filepath: str) -> None:
    """Display header and track summary panels."""
    header = parser.header
    track_header = parser.track_header

    file_content = f"""[bold]File:[/bold] {escape(filepath)}
[bold]Size:[/bold] {len(parser.data)} bytes
[bold]Format:[/bold] {header.format}
[bold]Tracks declared:[/bold] {header.track_count}
[bold]Division:[/bold] {header.division} ticks/qn"""

    if parser.length_mismatch:
        file_content += (
            f"\n[bold]Track length:[/bold] [yellow]{track_header.length} declared, "
            f"{parser.bytes_consumed} decoded[/yellow]"
        )
    else:
        file_content += f"\n[bold]Track length:[/bold] {track_header.length} bytes"

    console.print(
        Panel(file_content, title="[bold blue]MIDI File[/bold blue]", border_style="blue", expand=False)
    )

    duration = track.ticks_to_seconds(track.duration_ticks)
    pitch_range = format_range(*track.note_range) if track.note_range else "[dim]none[/dim]"
    time_sig = str(track.time_signature) if track.time_signature else "[dim]none[/dim]"

    track_content = f"""[bold]Name:[/bold] {escape(track.name) or "N/A"}
[bold]Tempo:[/bold] {format_tempo(track.tempo)}
[bold]Tempo changes:[/bold] {len(track.tempo_changes)}
[bold]Time Signature:[/bold] {time_sig}
[bold]Events:[/bold] {len(parser.events)}
[bold]Notes:[/bold] {track.note_count}
[bold]Pitch range:[/bold] {pitch_range}
[bold]Duration:[/bold] {track.duration_ticks} ticks ({format_seconds(duration)})"""

    if track.orphan_note_offs:
        track_content += f"\n[bold]Orphan note-offs:[/bold] [yellow]{track.orphan_note_offs}[/yellow]"

    console.print(
        Panel(track_content, title="[bold cyan]Track[/bold cyan]", border_style="cyan", expand=False)
    )


def display_notes(track: Track, tempo: Optional[int] = None, limit: Optional[int] = None) -> None:
    """Display reconstructed notes as a table."""
    notes = track.notes if limit is None else track.notes[:limit]
    effective = track.effective_tempo(tempo)

    table = Table(
        title=f"Notes ({track.note_count}) @ {format_tempo(effective)}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Note", style="cyan")
    table.add_column("On", justify="right")
    table.add_column("Off", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Velocity")

    for index, note in enumerate(notes):
        start, end = track.note_times(note, tempo)
        table.add_row(
            str(index),
            f"{note.name} ({note.number})",
            str(note.on_tick),
            str(note.off_tick),
            str(note.duration_ticks),
            format_seconds(start),
            format_seconds(end),
            velocity_bar(note.velocity),
        )

    console.print(table)

    if limit is not None and track.note_count > limit:
        console.print(f"[dim]... {track.note_count - limit} more notes[/dim]")


def display_events(events: Sequence[RawEvent], limit: Optional[int] = None) -> None:
    """Display the raw decoded event list."""
    shown = events if limit is None else events[:limit]

    table = Table(
        title=f"Events ({len(events)})",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Offset", style="dim")
    table.add_column("Delta", justify="right")
    table.add_column("Tick", justify="right")
    table.add_column("Kind", width=8)
    table.add_column("Ch", justify="right")
    table.add_column("Event")

    tick = 0
    for event in shown:
        tick += event.delta_ticks
        kind = event.kind

        if isinstance(kind, ChannelEvent):
            label, style, channel = "channel", "green", str(kind.channel)
        elif isinstance(kind, MetaEvent):
            label, style, channel = "meta", "yellow", ""
        else:
            label, style, channel = "sysex", "magenta", ""

        table.add_row(
            f"0x{event.offset:04X}",
            str(event.delta_ticks),
            str(tick),
            f"[{style}]{label}[/{style}]",
            channel,
            escape(event.describe()),
        )

    console.print(table)

    if limit is not None and len(events) > limit:
        console.print(f"[dim]... {len(events) - limit} more events[/dim]")


def display_scan(results: List[Tuple[str, Optional[Track], Optional[str]]]) -> None:
    """
    Display a directory scan summary.

    Args:
        results: (file name, track or None, error message or None) per file
    """
    table = Table(title="Scan", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("File", style="cyan")
    table.add_column("Status", width=8)
    table.add_column("Name")
    table.add_column("Division", justify="right")
    table.add_column("Notes", justify="right")
    table.add_column("Range")
    table.add_column("Duration", justify="right")

    for filename, track, error in results:
        if track is None:
            table.add_row(
                escape(filename), "[red]Error[/red]", f"[red]{escape(error)}[/red]", "", "", "", ""
            )
            continue

        pitch_range = format_range(*track.note_range) if track.note_range else "-"
        table.add_row(
            escape(filename),
            "[green]OK[/green]",
            escape(track.name),
            str(track.division),
            str(track.note_count),
            pitch_range,
            format_seconds(track.ticks_to_seconds(track.duration_ticks)),
        )

    console.print(table)
