"""
smfnotes - Standard MIDI File note decoder.

A CLI tool for decoding Format 0 MIDI files into note intervals.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.events import events
from cli.commands.info import info
from cli.commands.notes import notes
from cli.commands.scan import scan
from smfnotes import __version__

console = Console()

# Main app
app = typer.Typer(
    name="smfnotes",
    help="Decode Standard MIDI Files into note intervals.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="notes")(notes)
app.command(name="events")(events)
app.command(name="scan")(scan)


def setup_logging(verbose: bool = False) -> None:
    """Route smfnotes log records to a Rich handler on stderr."""
    logger = logging.getLogger("smfnotes")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfnotes[/bold] version {__version__}")
    console.print("[dim]Standard MIDI File note decoder[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every decoded event"),
) -> None:
    """
    smfnotes - Decode Format 0 Standard MIDI Files.

    [bold]Commands:[/bold]

        smfnotes info song.mid      # Header and track summary
        smfnotes notes song.mid     # Reconstructed note intervals
        smfnotes events song.mid    # Raw decoded event stream
        smfnotes scan ./stems       # Summarize every .mid in a directory

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
