"""Format handlers."""

from smfnotes.formats.smf import SMFParser, SMFReader, decode_track

__all__ = ["SMFParser", "SMFReader", "decode_track"]
