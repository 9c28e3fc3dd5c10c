"""
Note interval reconstruction.

Turns the decoder's delta-timed event list into closed notes in absolute
ticks. Each note-on opens an entry in a pending table keyed by note
number; the next note-off for that number closes it.

Rules:
    - The cursor advances by an event's delta before the event is read
    - A second note-on for a pending number replaces the first one
    - A note-off with nothing pending is an orphan: counted and logged
    - Notes still pending at end of track are dropped
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

from smfnotes.models.events import ChannelEvent, MetaEvent, MetaType, RawEvent, TimeSignature
from smfnotes.models.note import OPEN, Note
from smfnotes.models.track import TempoChange, Track

logger = logging.getLogger(__name__)


@dataclass
class ReconstructionResult:
    """
    Output of one reconstruction pass.

    Attributes:
        notes: Closed notes, ordered by the note-on that opened them
        track_name: Text of the first track-name meta event
        tempo_changes: Set-tempo events at their absolute ticks
        time_signature: First time signature seen
        orphan_note_offs: (tick, note number) of each unmatched note-off
        dropped: Notes still open when the track ended
        note_on_count: Number of note-on events seen
    """

    notes: List[Note] = field(default_factory=list)
    track_name: Optional[str] = None
    tempo_changes: List[TempoChange] = field(default_factory=list)
    time_signature: Optional[TimeSignature] = None
    orphan_note_offs: List[Tuple[int, int]] = field(default_factory=list)
    dropped: List[Note] = field(default_factory=list)
    note_on_count: int = 0


class NoteReconstructor:
    """
    Pairs note-ons with note-offs over one track's events.

    Each instance owns its cursor and pending table, so separate tracks can
    be reconstructed independently.

    Example:
        result = NoteReconstructor().reconstruct(events)
        for note in result.notes:
            print(note.name, note.on_tick, note.off_tick)
    """

    def __init__(self):
        self.cursor = 0
        self._pending: Dict[int, Tuple[int, Note]] = {}
        self._closed: List[Tuple[int, Note]] = []
        self._sequence = 0
        self.result = ReconstructionResult()

    def reconstruct(self, events: Iterable[RawEvent]) -> ReconstructionResult:
        """
        Reconstruct notes from decoded events.

        Args:
            events: Events in stream order

        Returns:
            ReconstructionResult with closed notes and advisory meta values
        """
        self.cursor = 0
        self._pending = {}
        self._closed = []
        self._sequence = 0
        self.result = ReconstructionResult()

        for event in events:
            self.cursor += event.delta_ticks
            kind = event.kind

            if isinstance(kind, ChannelEvent):
                if kind.is_note_on:
                    self._note_on(kind)
                elif kind.is_note_off:
                    self._note_off(kind)
            elif isinstance(kind, MetaEvent):
                if kind.is_end_of_track:
                    break
                self._meta(kind)

        self._closed.sort(key=lambda item: item[0])
        self.result.notes = [note for _, note in self._closed]
        self.result.dropped = [note for _, note in self._pending.values()]

        if self.result.dropped:
            logger.debug(
                "Dropped %d unterminated notes at end of track", len(self.result.dropped)
            )

        return self.result

    def _note_on(self, event: ChannelEvent) -> None:
        self.result.note_on_count += 1

        if event.note in self._pending:
            logger.debug(
                "Note-on %d at tick %d replaces pending note-on", event.note, self.cursor
            )

        self._pending[event.note] = (
            self._sequence,
            Note(on_tick=self.cursor, off_tick=OPEN, number=event.note, velocity=event.velocity),
        )
        self._sequence += 1

    def _note_off(self, event: ChannelEvent) -> None:
        entry = self._pending.pop(event.note, None)
        if entry is None:
            logger.warning(
                "Note-off %d at tick %d has no matching note-on", event.note, self.cursor
            )
            self.result.orphan_note_offs.append((self.cursor, event.note))
            return

        sequence, note = entry
        self._closed.append((sequence, replace(note, off_tick=self.cursor)))

    def _meta(self, event: MetaEvent) -> None:
        if event.type == MetaType.TRACK_NAME and self.result.track_name is None:
            self.result.track_name = event.text
        elif event.type == MetaType.SET_TEMPO:
            if event.tempo == 0:
                logger.warning("Set-tempo of 0 at tick %d cannot be used for timing", self.cursor)
            self.result.tempo_changes.append(TempoChange(tick=self.cursor, tempo=event.tempo))
        elif event.type == MetaType.TIME_SIGNATURE and self.result.time_signature is None:
            self.result.time_signature = event.time_signature


def reconstruct_notes(events: Iterable[RawEvent]) -> List[Note]:
    """
    Convenience function returning only the closed notes.

    Args:
        events: Events in stream order

    Returns:
        Closed notes ordered by note-on
    """
    return NoteReconstructor().reconstruct(events).notes


def build_track(events: Iterable[RawEvent], division: int, name: str = "") -> Track:
    """
    Reconstruct notes and package them as an immutable Track.

    Args:
        events: Events in stream order
        division: Ticks per quarter note from the file header
        name: Fallback name when the track has no track-name meta event

    Returns:
        Track
    """
    result = NoteReconstructor().reconstruct(events)

    return Track(
        name=result.track_name if result.track_name else name,
        division=division,
        notes=tuple(result.notes),
        tempo_changes=tuple(result.tempo_changes),
        time_signature=result.time_signature,
        orphan_note_offs=len(result.orphan_note_offs),
    )
