"""
Standard MIDI File binary parser.

Parses a Format 0 file into its header and the raw event list of its
single track chunk.

File structure:
    Offset  Size    Description
    0x00    14      Header chunk ("MThd", length, format, tracks, division)
    0x0E    8       Track chunk header ("MTrk", length)
    0x16    n       Track events, ending with FF 2F 00
"""

import logging
from typing import List, Optional, Tuple

from smfnotes.config import DecoderConfig
from smfnotes.formats.smf.chunks import Header, TrackChunkHeader, read_header, read_track_header
from smfnotes.formats.smf.decoder import EventStreamDecoder
from smfnotes.models.events import RawEvent
from smfnotes.utils.stream import ByteStream

logger = logging.getLogger(__name__)


class SMFParser:
    """
    Parser for Format 0 Standard MIDI Files.

    Example:
        parser = SMFParser()
        header, events = parser.parse_file("song.mid")
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()
        self.data: bytes = b""
        self.header: Optional[Header] = None
        self.track_header: Optional[TrackChunkHeader] = None
        self.events: List[RawEvent] = []
        self.end_offset: int = 0

    def parse_file(self, filepath: str) -> Tuple[Header, List[RawEvent]]:
        """
        Parse an SMF file.

        Args:
            filepath: Path to .mid file

        Returns:
            Tuple of (header, events)
        """
        with open(filepath, "rb") as f:
            data = f.read()

        return self.parse_bytes(data)

    def parse_bytes(self, data: bytes) -> Tuple[Header, List[RawEvent]]:
        """
        Parse SMF data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Tuple of (header, events)

        Raises:
            SMFError: Any decode failure; nothing is kept from a failed parse
        """
        self.data = bytes(data)
        self.header = None
        self.track_header = None
        self.events = []
        self.end_offset = 0

        stream = ByteStream(self.data)

        header = read_header(stream)
        track_header = read_track_header(stream)
        events = EventStreamDecoder(self.config).decode(stream)

        self.header = header
        self.track_header = track_header
        self.events = events
        self.end_offset = stream.pos

        if self.length_mismatch:
            logger.warning(
                "Track chunk declares %d bytes but events used %d",
                track_header.length,
                self.bytes_consumed,
            )

        if not stream.at_end:
            logger.debug("Ignoring %d bytes after end of track", stream.remaining)

        return header, events

    @property
    def bytes_consumed(self) -> int:
        """Track data bytes actually used by the decoded events."""
        if self.track_header is None:
            return 0
        return self.end_offset - self.track_header.offset

    @property
    def length_mismatch(self) -> bool:
        """True when the declared track length differs from the bytes decoded."""
        if self.track_header is None:
            return False
        return self.bytes_consumed != self.track_header.length

    def dump_structure(self) -> str:
        """
        Generate a text dump of file structure for debugging.

        Returns:
            Formatted structure description
        """
        lines = ["SMF File Structure:"]
        lines.append(f"  File size: {len(self.data)} bytes")

        if self.header:
            lines.append(f"  Format: {self.header.format}")
            lines.append(f"  Tracks declared: {self.header.track_count}")
            lines.append(f"  Division: {self.header.division} ticks/qn")

        if self.track_header:
            lines.append(f"  Track data @ 0x{self.track_header.offset:X}")
            lines.append(f"    declared length: {self.track_header.length} bytes")
            lines.append(f"    decoded length:  {self.bytes_consumed} bytes")
            lines.append(f"    events: {len(self.events)}")

        return "\n".join(lines)
