"""
Raw event data models.

A decoded track is a flat list of RawEvent values. Each carries its own
delta-time and exactly one of three event kinds: ChannelEvent, SysExEvent
or MetaEvent.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from smfnotes.utils.note_names import note_number_to_name


class ChannelEventType(IntEnum):
    """High nibble of a channel event status byte."""

    NOTE_OFF = 0x8
    NOTE_ON = 0x9
    POLY_PRESSURE = 0xA
    CONTROL_CHANGE = 0xB
    PROGRAM_CHANGE = 0xC
    CHANNEL_PRESSURE = 0xD
    PITCH_BEND = 0xE


# Data bytes following the status byte, per channel event type
CHANNEL_DATA_SIZES = {
    ChannelEventType.NOTE_OFF: 2,
    ChannelEventType.NOTE_ON: 2,
    ChannelEventType.POLY_PRESSURE: 2,
    ChannelEventType.CONTROL_CHANGE: 2,
    ChannelEventType.PROGRAM_CHANGE: 1,
    ChannelEventType.CHANNEL_PRESSURE: 1,
    ChannelEventType.PITCH_BEND: 2,
}


class MetaType(IntEnum):
    """Meta event types. Only a few change decoder behaviour."""

    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    CHANNEL_PREFIX = 0x20
    END_OF_TRACK = 0x2F
    SET_TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


# Payload length required for the meta types the decoder interprets
META_FIXED_LENGTHS = {
    MetaType.END_OF_TRACK: 0,
    MetaType.SET_TEMPO: 3,
    MetaType.TIME_SIGNATURE: 4,
}


@dataclass(frozen=True)
class TimeSignature:
    """
    Time signature from a 0x58 meta event.

    Attributes:
        numerator: Beats per measure
        denominator: Beat unit (2, 4, 8, ...), decoded from its power of two
        clocks_per_click: MIDI clocks per metronome click
        notated_32nds_per_quarter: Notated 32nd notes per MIDI quarter note
    """

    numerator: int
    denominator: int
    clocks_per_click: int
    notated_32nds_per_quarter: int

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class ChannelEvent:
    """
    A MIDI channel event.

    Attributes:
        type: Event type from the status high nibble
        channel: MIDI channel (0-15) from the status low nibble
        data1: First data byte (note number, controller, program, ...)
        data2: Second data byte, 0 for single-byte events
    """

    type: ChannelEventType
    channel: int
    data1: int = 0
    data2: int = 0

    @property
    def is_note_on(self) -> bool:
        return self.type == ChannelEventType.NOTE_ON

    @property
    def is_note_off(self) -> bool:
        return self.type == ChannelEventType.NOTE_OFF

    @property
    def note(self) -> int:
        """Note number for note events."""
        return self.data1

    @property
    def velocity(self) -> int:
        """Velocity for note events."""
        return self.data2

    def describe(self) -> str:
        if self.is_note_on or self.is_note_off:
            label = "NoteOn" if self.is_note_on else "NoteOff"
            return f"{label}({note_number_to_name(self.note)}/{self.note}, vel={self.velocity})"
        if CHANNEL_DATA_SIZES[self.type] == 1:
            return f"{self.type.name}({self.data1})"
        return f"{self.type.name}({self.data1}, {self.data2})"


@dataclass(frozen=True)
class SysExEvent:
    """A system-exclusive event (status 0xF0 or 0xF7). Skipped by the reconstructor."""

    status: int
    length: int
    data: bytes = b""

    def describe(self) -> str:
        return f"SysEx(0x{self.status:02X}, {self.length} bytes)"


@dataclass(frozen=True)
class MetaEvent:
    """
    A meta event (status 0xFF).

    Attributes:
        type: Meta type byte
        length: Declared payload length
        data: Payload bytes
    """

    type: int
    length: int
    data: bytes = b""

    @property
    def is_end_of_track(self) -> bool:
        return self.type == MetaType.END_OF_TRACK

    @property
    def type_name(self) -> str:
        try:
            return MetaType(self.type).name
        except ValueError:
            return f"META_0x{self.type:02X}"

    @property
    def tempo(self) -> Optional[int]:
        """Microseconds per quarter note for set-tempo events."""
        if self.type != MetaType.SET_TEMPO or len(self.data) != 3:
            return None
        return (self.data[0] << 16) | (self.data[1] << 8) | self.data[2]

    @property
    def time_signature(self) -> Optional[TimeSignature]:
        if self.type != MetaType.TIME_SIGNATURE or len(self.data) != 4:
            return None
        nn, dd, cc, bb = self.data
        return TimeSignature(
            numerator=nn,
            denominator=2**dd,
            clocks_per_click=cc,
            notated_32nds_per_quarter=bb,
        )

    @property
    def text(self) -> Optional[str]:
        """Payload as text for the text-like meta types (0x01-0x07)."""
        if not MetaType.TEXT <= self.type <= MetaType.CUE_POINT:
            return None
        return self.data.decode("latin-1").rstrip("\x00")

    def describe(self) -> str:
        if self.tempo is not None:
            return f"{self.type_name}({self.tempo} us/qn)"
        if self.time_signature is not None:
            return f"{self.type_name}({self.time_signature})"
        if self.text is not None:
            return f"{self.type_name}({self.text!r})"
        return f"{self.type_name}({self.length} bytes)"


EventKind = Union[ChannelEvent, SysExEvent, MetaEvent]


@dataclass(frozen=True)
class RawEvent:
    """
    One decoded event with its delta-time.

    Attributes:
        delta_ticks: Ticks since the previous event (not a running total)
        kind: The decoded event
        offset: Byte offset of the event's status byte in the file
    """

    delta_ticks: int
    kind: EventKind
    offset: int = 0

    def describe(self) -> str:
        return self.kind.describe()
