"""
smfnotes - Standard MIDI File decoder and note interval reconstruction.

This library provides tools to:
- Decode Format 0 Standard MIDI Files (.mid)
- Reconstruct note-on/note-off pairs into absolute-tick note intervals
- Convert ticks to seconds for a given tempo and division

Example usage:
    from smfnotes import SMFReader

    track = SMFReader.read("song.mid")
    for note in track.notes:
        start, end = track.note_times(note)
        print(f"{note.name}: {start:.3f}s - {end:.3f}s vel={note.velocity}")
"""

__version__ = "0.1.0"
__author__ = "smfnotes Contributors"

from smfnotes.config import DecoderConfig
from smfnotes.errors import (
    FormatError,
    InvalidMetaLengthError,
    SMFError,
    TruncatedStreamError,
    UnsupportedChannelEventError,
    UnsupportedDivisionError,
    UnsupportedFormatError,
)
from smfnotes.formats.smf.reader import SMFReader, decode_track
from smfnotes.models.note import Note
from smfnotes.models.track import Track

__all__ = [
    "DecoderConfig",
    "FormatError",
    "InvalidMetaLengthError",
    "SMFError",
    "TruncatedStreamError",
    "UnsupportedChannelEventError",
    "UnsupportedDivisionError",
    "UnsupportedFormatError",
    "SMFReader",
    "decode_track",
    "Note",
    "Track",
]
