"""Data models for decoded MIDI data."""

from smfnotes.models.events import (
    ChannelEvent,
    ChannelEventType,
    MetaEvent,
    MetaType,
    RawEvent,
    SysExEvent,
    TimeSignature,
)
from smfnotes.models.note import Note, OPEN
from smfnotes.models.track import TempoChange, Track, note_range

__all__ = [
    "ChannelEvent",
    "ChannelEventType",
    "MetaEvent",
    "MetaType",
    "RawEvent",
    "SysExEvent",
    "TimeSignature",
    "Note",
    "OPEN",
    "TempoChange",
    "Track",
    "note_range",
]
