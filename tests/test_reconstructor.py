"""Tests for note interval reconstruction."""

import logging
import random

import pytest

from builders import MINIMAL_EVENTS, end_of_track, event, meta, note_off, note_on
from smfnotes.analysis.reconstructor import NoteReconstructor, build_track, reconstruct_notes
from smfnotes.formats.smf.decoder import decode_events
from smfnotes.models.events import ChannelEvent, ChannelEventType, MetaEvent, RawEvent
from smfnotes.models.note import OPEN, Note
from smfnotes.utils.stream import ByteStream


def events_from(*chunks: bytes):
    return decode_events(ByteStream(b"".join(chunks)))


def on(delta, note, velocity=100):
    return RawEvent(delta, ChannelEvent(ChannelEventType.NOTE_ON, 0, note, velocity))


def off(delta, note):
    return RawEvent(delta, ChannelEvent(ChannelEventType.NOTE_OFF, 0, note, 0))


EOT = RawEvent(0, MetaEvent(0x2F, 0))


class TestNoteReconstructor:
    """Test cases for pairing note-ons with note-offs."""

    def test_minimal_track(self):
        """Test the single note scenario."""
        notes = reconstruct_notes(events_from(*MINIMAL_EVENTS))

        assert notes == [Note(on_tick=0, off_tick=480, number=60, velocity=100)]

    def test_delta_applies_before_event(self):
        """Test that the cursor advances before each event is read."""
        notes = reconstruct_notes([on(100, 60), off(50, 60), EOT])

        assert notes[0].on_tick == 100
        assert notes[0].off_tick == 150

    def test_orphan_note_off(self, caplog):
        """Test that an unmatched note-off adds nothing and does not raise."""
        reconstructor = NoteReconstructor()

        with caplog.at_level(logging.WARNING, logger="smfnotes"):
            result = reconstructor.reconstruct([on(0, 60), off(10, 62), off(10, 60), EOT])

        assert [n.number for n in result.notes] == [60]
        assert result.orphan_note_offs == [(10, 62)]
        assert "no matching note-on" in caplog.text

    def test_orphan_after_close(self):
        """Test that a second note-off for a closed note is an orphan."""
        result = NoteReconstructor().reconstruct([on(0, 60), off(10, 60), off(10, 60), EOT])

        assert len(result.notes) == 1
        assert result.orphan_note_offs == [(20, 60)]

    def test_duplicate_note_on_replaces_pending(self):
        """Test that a second note-on drops the earlier pending one."""
        notes = reconstruct_notes([on(0, 60, 100), on(10, 60, 50), off(10, 60), EOT])

        assert notes == [Note(on_tick=10, off_tick=20, number=60, velocity=50)]

    def test_pending_notes_dropped_at_end(self):
        """Test that notes still open at end-of-track are not returned."""
        result = NoteReconstructor().reconstruct([on(0, 60), on(0, 64), off(96, 64), EOT])

        assert [n.number for n in result.notes] == [64]
        assert len(result.dropped) == 1
        assert result.dropped[0].number == 60
        assert result.dropped[0].off_tick == OPEN
        assert all(not n.is_open for n in result.notes)

    def test_events_after_end_of_track_ignored(self):
        """Test that nothing after end-of-track is interpreted."""
        notes = reconstruct_notes([on(0, 60), EOT, off(10, 60)])

        assert notes == []

    def test_non_note_events_advance_cursor(self):
        """Test that sysex, meta and other channel events still carry time."""
        events = events_from(
            note_on(0, 60, 100),
            event(100, 0xB0, 7, 100),
            event(100, 0xF0, 0x01, 0xF7),
            meta(100, 0x01, b"text"),
            note_off(100, 60),
            end_of_track(),
        )

        notes = reconstruct_notes(events)

        assert notes[0].off_tick == 400

    def test_zero_length_note_kept(self):
        """Test that a note-off at the note-on tick closes the note."""
        notes = reconstruct_notes([on(10, 60), off(0, 60), EOT])

        assert notes == [Note(on_tick=10, off_tick=10, number=60, velocity=100)]

    def test_overlapping_notes_ordered_by_note_on(self):
        """Test that output follows note-on order even when closes interleave."""
        notes = reconstruct_notes([on(0, 48), on(10, 60), off(10, 60), off(10, 48), EOT])

        assert [(n.number, n.on_tick, n.off_tick) for n in notes] == [(48, 0, 30), (60, 10, 20)]

    def test_note_count_invariant(self):
        """Test notes never outnumber note-ons, and match when all close."""
        closed = NoteReconstructor().reconstruct([on(0, 60), off(5, 60), on(0, 62), off(5, 62), EOT])
        assert len(closed.notes) == closed.note_on_count == 2

        partial = NoteReconstructor().reconstruct([on(0, 60), on(0, 60), off(5, 60), on(0, 62), EOT])
        assert len(partial.notes) < partial.note_on_count

    def test_reconstructor_reusable(self):
        """Test that each pass starts from a fresh cursor and table."""
        reconstructor = NoteReconstructor()
        reconstructor.reconstruct([on(100, 60), EOT])
        result = reconstructor.reconstruct([on(0, 62), off(10, 62), EOT])

        assert result.notes == [Note(on_tick=0, off_tick=10, number=62, velocity=100)]
        assert result.dropped == []


class TestReconstructionProperties:
    """Property checks over generated event streams."""

    @pytest.mark.parametrize("seed", range(5))
    def test_ticks_monotonic(self, seed):
        """Test on_tick ordering and on_tick <= off_tick for random streams."""
        rng = random.Random(seed)
        events = []
        note_ons = 0
        for _ in range(300):
            note = rng.randint(36, 48)
            delta = rng.choice([0, 0, 1, 12, 96, 480])
            if rng.random() < 0.55:
                events.append(on(delta, note, rng.randint(1, 127)))
                note_ons += 1
            else:
                events.append(off(delta, note))
        events.append(EOT)

        cursor = 0
        cursors = []
        for e in events:
            cursor += e.delta_ticks
            cursors.append(cursor)
        assert cursors == sorted(cursors)

        notes = reconstruct_notes(events)

        assert len(notes) <= note_ons
        assert all(n.on_tick <= n.off_tick for n in notes)
        on_ticks = [n.on_tick for n in notes]
        assert on_ticks == sorted(on_ticks)


class TestBuildTrack:
    """Test cases for packaging results into a Track."""

    def test_meta_values_collected(self, song_smf_data):
        """Test that name, tempo and time signature reach the Track."""
        events = decode_events(ByteStream(song_smf_data[22:]))

        track = build_track(events, division=480, name="fallback")

        assert track.name == "Lead"
        assert track.division == 480
        assert track.tempo == 500000
        assert track.time_signature.numerator == 3
        assert track.time_signature.denominator == 4
        assert [n.number for n in track.notes] == [60, 64, 67]
        assert isinstance(track.notes, tuple)

    def test_name_fallback(self):
        """Test that the fallback name is used without a track-name event."""
        track = build_track([on(0, 60), off(10, 60), EOT], division=96, name="kick.mid")

        assert track.name == "kick.mid"
        assert track.tempo is None
        assert track.time_signature is None

    def test_tempo_changes_at_ticks(self):
        """Test that tempo changes are placed at their absolute ticks."""
        events = events_from(
            meta(0, 0x51, bytes([0x07, 0xA1, 0x20])),
            meta(960, 0x51, bytes([0x05, 0xB8, 0xD8])),
            end_of_track(),
        )

        track = build_track(events, division=480)

        assert [(t.tick, t.tempo) for t in track.tempo_changes] == [(0, 500000), (960, 375000)]
        assert track.tempo == 500000
        assert track.tempo_changes[1].bpm == 160.0

    def test_zero_tempo_warns(self, caplog):
        """Test that a zero set-tempo is kept on the Track and logged."""
        events = events_from(meta(0, 0x51, b"\x00\x00\x00"), end_of_track())

        with caplog.at_level(logging.WARNING, logger="smfnotes"):
            track = build_track(events, division=480)

        assert track.tempo == 0
        assert "Set-tempo of 0" in caplog.text

    def test_orphans_counted(self):
        """Test that orphan note-offs are counted on the Track."""
        track = build_track([off(0, 60), off(0, 61), EOT], division=96)

        assert track.notes == ()
        assert track.orphan_note_offs == 2
