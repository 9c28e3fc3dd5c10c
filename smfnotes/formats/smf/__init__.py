"""Standard MIDI File handlers."""

from smfnotes.formats.smf.parser import SMFParser
from smfnotes.formats.smf.reader import SMFReader, decode_track

__all__ = ["SMFParser", "SMFReader", "decode_track"]
