"""Utility functions for smfnotes."""

from smfnotes.utils.stream import ByteStream
from smfnotes.utils.vlq import decode_vlq, encode_vlq
from smfnotes.utils.note_names import note_number_to_name
from smfnotes.utils.timing import (
    seconds_per_tick,
    ticks_to_seconds,
    seconds_to_ticks,
    nearest_tick,
)

__all__ = [
    "ByteStream",
    "decode_vlq",
    "encode_vlq",
    "note_number_to_name",
    "seconds_per_tick",
    "ticks_to_seconds",
    "seconds_to_ticks",
    "nearest_tick",
]
