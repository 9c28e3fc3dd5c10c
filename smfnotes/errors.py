"""
Exceptions raised while decoding Standard MIDI Files.

Every error aborts the current decode pass. The byte offset at which the
decoder gave up is kept on the exception for diagnostics.
"""

from typing import Optional


class SMFError(Exception):
    """Base class for all decode-time failures."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte 0x{offset:X})"
        super().__init__(message)


class FormatError(SMFError):
    """Raised when a chunk tag is not the one expected (MThd/MTrk)."""

    pass


class UnsupportedFormatError(SMFError):
    """Raised when the header format field is not 0."""

    pass


class UnsupportedDivisionError(SMFError):
    """Raised when the division field encodes SMPTE frame-based timing or is zero."""

    pass


class TruncatedStreamError(SMFError, EOFError):
    """Raised when the data ends while more bytes were expected."""

    pass


class InvalidMetaLengthError(SMFError):
    """Raised when a fixed-size meta event declares the wrong payload length."""

    pass


class UnsupportedChannelEventError(SMFError):
    """Raised when a channel event's data size cannot be determined."""

    pass
