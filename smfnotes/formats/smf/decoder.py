"""
SMF track event stream decoder.

Walks the bytes of one track chunk and produces a flat list of RawEvent
values, each with its own delta-time.

Track data grammar:
    <MTrk event> = <VLQ delta-time> <event>
    <event>      = FF <type> <VLQ length> <data>      meta event
                 | F0|F7 <VLQ length> <data>          sysex event
                 | <status 80-EF> <1 or 2 data bytes> channel event

Decoding stops at the end-of-track meta event (FF 2F 00) and only there.
Running status is not supported: a data byte in status position is
rejected rather than guessed at.
"""

import logging
from typing import List, Optional

from smfnotes.config import DecoderConfig
from smfnotes.errors import (
    InvalidMetaLengthError,
    TruncatedStreamError,
    UnsupportedChannelEventError,
)
from smfnotes.models.events import (
    CHANNEL_DATA_SIZES,
    META_FIXED_LENGTHS,
    ChannelEvent,
    ChannelEventType,
    MetaEvent,
    RawEvent,
    SysExEvent,
)
from smfnotes.utils.stream import ByteStream
from smfnotes.utils.vlq import decode_vlq

logger = logging.getLogger(__name__)

META_STATUS = 0xFF
SYSEX_STATUSES = (0xF0, 0xF7)


class EventStreamDecoder:
    """
    Decoder for the event stream of a single track chunk.

    Example:
        decoder = EventStreamDecoder()
        events = decoder.decode(ByteStream(track_bytes))
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()
        self.events: List[RawEvent] = []

    def decode(self, stream: ByteStream) -> List[RawEvent]:
        """
        Decode events until the end-of-track meta event.

        Args:
            stream: Stream positioned at the first delta-time of the track

        Returns:
            Events in stream order, end-of-track included

        Raises:
            TruncatedStreamError: Data ends before end-of-track
            InvalidMetaLengthError: Bad length on a fixed-size meta event
            UnsupportedChannelEventError: Status byte of unknown size
        """
        self.events = []

        while True:
            if stream.at_end:
                raise TruncatedStreamError("Track ended without end-of-track event", offset=stream.pos)

            event = self._decode_event(stream)
            self.events.append(event)

            if isinstance(event.kind, MetaEvent) and event.kind.is_end_of_track:
                break

        logger.debug("Decoded %d events, stopped at byte 0x%X", len(self.events), stream.pos)
        return self.events

    def _decode_event(self, stream: ByteStream) -> RawEvent:
        """Decode one delta-time and the event that follows it."""
        delta = decode_vlq(stream)
        offset = stream.pos
        status = stream.read_u8()

        if status == META_STATUS:
            kind = self._decode_meta(stream, offset)
        elif status in SYSEX_STATUSES:
            kind = self._decode_sysex(stream, status)
        else:
            kind = self._decode_channel(stream, status, offset)

        logger.debug("+%d @0x%X %s", delta, offset, kind.describe())
        return RawEvent(delta_ticks=delta, kind=kind, offset=offset)

    def _decode_meta(self, stream: ByteStream, offset: int) -> MetaEvent:
        """Decode a meta event: FF <type> <length> <data>."""
        meta_type = stream.read_u8()
        length = decode_vlq(stream)

        expected = META_FIXED_LENGTHS.get(meta_type)
        if expected is not None and length != expected:
            event_name = MetaEvent(type=meta_type, length=length).type_name
            raise InvalidMetaLengthError(
                f"{event_name} meta event has length {length} (expected {expected})",
                offset=offset,
            )

        data = stream.read(length)
        return MetaEvent(type=meta_type, length=length, data=data)

    def _decode_sysex(self, stream: ByteStream, status: int) -> SysExEvent:
        """Decode a sysex event: F0|F7 <length> <data>."""
        length = decode_vlq(stream)
        data = stream.read(length)
        return SysExEvent(status=status, length=length, data=data)

    def _decode_channel(self, stream: ByteStream, status: int, offset: int) -> ChannelEvent:
        """Decode a channel event, sizing its data from the status high nibble."""
        try:
            event_type = ChannelEventType(status >> 4)
        except ValueError:
            raise UnsupportedChannelEventError(
                f"Cannot determine data size for status byte 0x{status:02X}", offset=offset
            ) from None

        data = stream.read(CHANNEL_DATA_SIZES[event_type])
        data1 = data[0]
        data2 = data[1] if len(data) > 1 else 0

        if (
            event_type == ChannelEventType.NOTE_ON
            and data2 == 0
            and self.config.note_on_zero_velocity_as_off
        ):
            event_type = ChannelEventType.NOTE_OFF

        return ChannelEvent(type=event_type, channel=status & 0x0F, data1=data1, data2=data2)


def decode_events(stream: ByteStream, config: Optional[DecoderConfig] = None) -> List[RawEvent]:
    """
    Convenience function to decode a track event stream.

    Args:
        stream: Stream positioned at the first delta-time of the track
        config: Decoder options

    Returns:
        Events in stream order
    """
    return EventStreamDecoder(config).decode(stream)
