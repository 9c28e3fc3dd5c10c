"""
Bounds-checked cursor over an in-memory SMF buffer.

All reads go through ByteStream so that running off the end of the data
always surfaces as TruncatedStreamError instead of an IndexError or a
short read.
"""

import struct
from typing import Union

from smfnotes.errors import TruncatedStreamError


class ByteStream:
    """
    Sequential reader over bytes.

    Example:
        stream = ByteStream(b"MThd\\x00\\x00\\x00\\x06")
        tag = stream.read(4)
        length = stream.read_u32()
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], pos: int = 0):
        self.data = bytes(data)
        self.pos = pos

    def __len__(self) -> int:
        return len(self.data)

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self.data) - self.pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def read(self, count: int) -> bytes:
        """
        Read exactly count bytes.

        Raises:
            TruncatedStreamError: If fewer than count bytes remain
        """
        if count < 0:
            raise ValueError(f"Negative read size: {count}")

        end = self.pos + count
        if end > len(self.data):
            raise TruncatedStreamError(
                f"Expected {count} bytes, only {self.remaining} left", offset=self.pos
            )

        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def read_u8(self) -> int:
        if self.pos >= len(self.data):
            raise TruncatedStreamError("Unexpected end of data", offset=self.pos)

        value = self.data[self.pos]
        self.pos += 1
        return value

    def read_u16(self) -> int:
        """Read a big-endian unsigned 16-bit integer."""
        return struct.unpack(">H", self.read(2))[0]

    def read_u32(self) -> int:
        """Read a big-endian unsigned 32-bit integer."""
        return struct.unpack(">I", self.read(4))[0]

    def skip(self, count: int) -> None:
        """Advance past count bytes, failing if they are not all present."""
        self.read(count)
