"""Tests for the track event stream decoder."""

import pytest

from builders import MINIMAL_EVENTS, end_of_track, event, meta, note_off, note_on
from smfnotes.config import DecoderConfig
from smfnotes.errors import (
    InvalidMetaLengthError,
    TruncatedStreamError,
    UnsupportedChannelEventError,
)
from smfnotes.formats.smf.decoder import EventStreamDecoder, decode_events
from smfnotes.models.events import (
    ChannelEvent,
    ChannelEventType,
    MetaEvent,
    MetaType,
    SysExEvent,
)
from smfnotes.utils.stream import ByteStream


def decode(*chunks: bytes, config: DecoderConfig = None):
    return decode_events(ByteStream(b"".join(chunks)), config)


class TestEventStream:
    """Test cases for the decode loop."""

    def test_minimal_track(self):
        """Test decoding note-on, note-off and end-of-track."""
        events = decode(*MINIMAL_EVENTS)

        assert len(events) == 3
        on, off, end = events

        assert on.delta_ticks == 0
        assert on.kind == ChannelEvent(ChannelEventType.NOTE_ON, 0, 60, 100)
        assert off.delta_ticks == 480
        assert off.kind == ChannelEvent(ChannelEventType.NOTE_OFF, 0, 60, 0)
        assert isinstance(end.kind, MetaEvent)
        assert end.kind.is_end_of_track

    def test_deltas_are_not_accumulated(self):
        """Test that each event keeps its own delta-time."""
        events = decode(
            note_on(10, 60, 100),
            note_off(20, 60),
            note_on(30, 62, 100),
            note_off(40, 62),
            end_of_track(5),
        )

        assert [e.delta_ticks for e in events] == [10, 20, 30, 40, 5]

    def test_event_offsets(self):
        """Test that events record the offset of their status byte."""
        events = decode(*MINIMAL_EVENTS)

        assert [e.offset for e in events] == [1, 6, 10]

    def test_stops_at_end_of_track(self):
        """Test that bytes after end-of-track are left unread."""
        stream = ByteStream(b"".join(MINIMAL_EVENTS) + b"garbage")

        events = EventStreamDecoder().decode(stream)

        assert len(events) == 3
        assert stream.remaining == len(b"garbage")

    def test_missing_end_of_track(self):
        """Test that running out of data without end-of-track fails."""
        with pytest.raises(TruncatedStreamError, match="without end-of-track"):
            decode(note_on(0, 60, 100), note_off(480, 60))

    def test_empty_track_data(self):
        """Test that an empty track fails."""
        with pytest.raises(TruncatedStreamError):
            decode(b"")

    def test_truncated_after_note_on_status(self):
        """Test a stream ending right after a note-on status byte."""
        with pytest.raises(TruncatedStreamError):
            decode(event(0, 0x90))

    def test_unterminated_delta(self):
        """Test a delta-time that never clears its continuation bit."""
        with pytest.raises(TruncatedStreamError):
            decode(note_on(0, 60, 100), bytes([0x81, 0xFF, 0xFF]))

    def test_decoder_keeps_events(self):
        """Test that the decoder instance exposes its last result."""
        decoder = EventStreamDecoder()
        events = decoder.decode(ByteStream(b"".join(MINIMAL_EVENTS)))

        assert decoder.events is events


class TestMetaEvents:
    """Test cases for meta event decoding."""

    def test_set_tempo(self):
        """Test decoding a set-tempo value."""
        events = decode(meta(0, 0x51, bytes([0x07, 0xA1, 0x20])), end_of_track())

        assert events[0].kind.type == MetaType.SET_TEMPO
        assert events[0].kind.tempo == 500000

    def test_time_signature(self):
        """Test decoding a time signature."""
        events = decode(meta(0, 0x58, bytes([6, 3, 36, 8])), end_of_track())

        ts = events[0].kind.time_signature
        assert ts.numerator == 6
        assert ts.denominator == 8
        assert ts.clocks_per_click == 36
        assert ts.notated_32nds_per_quarter == 8
        assert str(ts) == "6/8"

    def test_track_name(self):
        """Test decoding track name text."""
        events = decode(meta(0, 0x03, b"Piano"), end_of_track())

        assert events[0].kind.text == "Piano"

    @pytest.mark.parametrize("meta_type", [0x01, 0x21, 0x59, 0x7F, 0x60])
    def test_other_meta_skipped(self, meta_type):
        """Test that other meta types are consumed without error."""
        events = decode(meta(0, meta_type, b"\x01\x02\x03"), *MINIMAL_EVENTS)

        assert events[0].kind.length == 3
        assert events[0].kind.data == b"\x01\x02\x03"
        assert events[1].kind.is_note_on

    def test_end_of_track_with_payload_rejected(self):
        """Test that end-of-track must have length 0."""
        with pytest.raises(InvalidMetaLengthError, match="END_OF_TRACK"):
            decode(meta(0, 0x2F, b"\x00"))

    @pytest.mark.parametrize("length", [0, 2, 4])
    def test_set_tempo_length_checked(self, length):
        """Test that set-tempo must have length 3."""
        with pytest.raises(InvalidMetaLengthError, match="SET_TEMPO"):
            decode(meta(0, 0x51, bytes(length)), end_of_track())

    @pytest.mark.parametrize("length", [3, 5])
    def test_time_signature_length_checked(self, length):
        """Test that time signature must have length 4."""
        with pytest.raises(InvalidMetaLengthError, match="TIME_SIGNATURE"):
            decode(meta(0, 0x58, bytes(length)), end_of_track())

    def test_truncated_meta_payload(self):
        """Test a meta event whose payload runs past end of data."""
        with pytest.raises(TruncatedStreamError):
            decode(event(0, 0xFF, 0x03, 0x10, ord("A"), ord("B")))

    def test_long_meta_length_vlq(self):
        """Test a meta payload whose length needs a two-byte VLQ."""
        payload = bytes(200)
        events = decode(meta(0, 0x7F, payload), end_of_track())

        assert events[0].kind.length == 200


class TestSysExEvents:
    """Test cases for system-exclusive events."""

    @pytest.mark.parametrize("status", [0xF0, 0xF7])
    def test_sysex_skipped(self, status):
        """Test that sysex payloads are skipped and the stream stays aligned."""
        sysex = event(0, status, 0x05, 0x43, 0x10, 0x4C, 0x00, 0xF7)
        events = decode(sysex, *MINIMAL_EVENTS)

        assert events[0].kind == SysExEvent(status=status, length=5, data=bytes([0x43, 0x10, 0x4C, 0x00, 0xF7]))
        assert events[1].kind.is_note_on
        assert events[1].kind.note == 60

    def test_truncated_sysex(self):
        """Test a sysex event whose payload runs past end of data."""
        with pytest.raises(TruncatedStreamError):
            decode(event(0, 0xF0, 0x08, 0x43, 0x10))


class TestChannelEvents:
    """Test cases for channel event decoding."""

    def test_channel_recorded(self):
        """Test that the status low nibble is kept as the channel."""
        events = decode(note_on(0, 60, 100, channel=9), note_off(10, 60, channel=9), end_of_track())

        assert events[0].kind.channel == 9
        assert events[1].kind.channel == 9

    @pytest.mark.parametrize(
        "status,data,event_type",
        [
            (0xA0, (60, 40), ChannelEventType.POLY_PRESSURE),
            (0xB3, (7, 100), ChannelEventType.CONTROL_CHANGE),
            (0xC1, (33,), ChannelEventType.PROGRAM_CHANGE),
            (0xD2, (90,), ChannelEventType.CHANNEL_PRESSURE),
            (0xEF, (0x00, 0x40), ChannelEventType.PITCH_BEND),
        ],
    )
    def test_other_channel_events_sized(self, status, data, event_type):
        """Test that non-note channel events consume exactly their data bytes."""
        events = decode(event(0, status, *data), *MINIMAL_EVENTS)

        assert events[0].kind.type == event_type
        assert events[0].kind.channel == status & 0x0F
        assert events[0].kind.data1 == data[0]
        assert events[1].kind == ChannelEvent(ChannelEventType.NOTE_ON, 0, 60, 100)
        assert len(events) == 4

    def test_running_status_rejected(self):
        """Test that a data byte in status position is rejected."""
        with pytest.raises(UnsupportedChannelEventError, match="0x3E"):
            decode(note_on(0, 60, 100), event(0, 0x3E, 100), end_of_track())

    @pytest.mark.parametrize("status", [0xF1, 0xF2, 0xF3, 0xF8, 0xFE])
    def test_system_common_rejected(self, status):
        """Test that system common and real-time bytes are rejected."""
        with pytest.raises(UnsupportedChannelEventError):
            decode(event(0, status, 0x00), end_of_track())

    def test_truncated_program_change(self):
        """Test a program change missing its data byte."""
        with pytest.raises(TruncatedStreamError):
            decode(event(0, 0xC0))

    def test_zero_velocity_note_on_kept_by_default(self):
        """Test that velocity-0 note-on stays a note-on by default."""
        events = decode(note_on(0, 60, 100), note_on(96, 60, 0), end_of_track())

        assert events[1].kind.is_note_on
        assert events[1].kind.velocity == 0

    def test_zero_velocity_note_on_as_off(self):
        """Test the option reading velocity-0 note-on as note-off."""
        config = DecoderConfig(note_on_zero_velocity_as_off=True)
        events = decode(note_on(0, 60, 100), note_on(96, 60, 0), end_of_track(), config=config)

        assert events[0].kind.is_note_on
        assert events[1].kind.is_note_off
        assert events[1].kind.note == 60
