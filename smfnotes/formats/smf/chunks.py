"""
SMF chunk headers.

Header chunk layout (14 bytes):
    Offset  Size    Description
    0x00    4       Tag "MThd"
    0x04    4       Header length (big-endian, normally 6)
    0x08    2       Format (only 0 supported)
    0x0A    2       Track count
    0x0C    2       Division (bit 15 clear: ticks per quarter note)

Track chunk header (8 bytes, follows the header chunk):
    0x00    4       Tag "MTrk"
    0x04    4       Track data length (big-endian, advisory)
"""

import logging
from dataclasses import dataclass

from smfnotes.errors import FormatError, UnsupportedDivisionError, UnsupportedFormatError
from smfnotes.utils.stream import ByteStream

logger = logging.getLogger(__name__)

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
HEADER_DATA_SIZE = 6

SUPPORTED_FORMAT = 0
SMPTE_DIVISION_FLAG = 0x80


@dataclass
class Header:
    """
    SMF header chunk.

    Attributes:
        length: Declared header data length
        format: File format (0, 1 or 2)
        track_count: Number of track chunks declared
        division: Ticks per quarter note
    """

    length: int
    format: int
    track_count: int
    division: int


@dataclass
class TrackChunkHeader:
    """
    Track chunk header.

    Attributes:
        offset: File offset of the first track data byte
        length: Declared track data length
    """

    offset: int
    length: int

    @property
    def end(self) -> int:
        """Declared end offset of the track data."""
        return self.offset + self.length


def read_header(stream: ByteStream) -> Header:
    """
    Read and validate the header chunk.

    Args:
        stream: Stream positioned at the start of the file

    Returns:
        Parsed Header

    Raises:
        FormatError: Tag is not "MThd"
        UnsupportedFormatError: Format is not 0
        UnsupportedDivisionError: Division uses SMPTE frames or is zero
        TruncatedStreamError: Data ends inside the header
    """
    start = stream.pos
    tag = stream.read(4)
    if tag != HEADER_TAG:
        raise FormatError(f"Invalid header chunk tag {tag!r} (expected {HEADER_TAG!r})", offset=start)

    length = stream.read_u32()
    logger.debug("Header length: %d", length)

    format_pos = stream.pos
    file_format = stream.read_u16()
    if file_format != SUPPORTED_FORMAT:
        raise UnsupportedFormatError(
            f"SMF format {file_format} not supported (only format 0)", offset=format_pos
        )

    track_count = stream.read_u16()

    division_pos = stream.pos
    division_bytes = stream.read(2)
    if division_bytes[0] & SMPTE_DIVISION_FLAG:
        raise UnsupportedDivisionError(
            f"SMPTE time division 0x{division_bytes.hex().upper()} not supported",
            offset=division_pos,
        )
    division = (division_bytes[0] << 8) | division_bytes[1]
    if division == 0:
        raise UnsupportedDivisionError("Division of 0 ticks per quarter note", offset=division_pos)

    # Skip any header fields newer than the six bytes we know about
    if length > HEADER_DATA_SIZE:
        stream.skip(length - HEADER_DATA_SIZE)

    logger.debug(
        "Format: %d, tracks: %d, division: %d ticks/qn", file_format, track_count, division
    )

    return Header(length=length, format=file_format, track_count=track_count, division=division)


def read_track_header(stream: ByteStream) -> TrackChunkHeader:
    """
    Read and validate a track chunk header.

    Raises:
        FormatError: Tag is not "MTrk"
        TruncatedStreamError: Data ends inside the chunk header
    """
    start = stream.pos
    tag = stream.read(4)
    if tag != TRACK_TAG:
        raise FormatError(f"Invalid track chunk tag {tag!r} (expected {TRACK_TAG!r})", offset=start)

    length = stream.read_u32()
    logger.debug("Track length: %d", length)

    return TrackChunkHeader(offset=stream.pos, length=length)
