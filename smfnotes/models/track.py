"""
Track data model.

A Track is the finished product of a decode pass: closed notes plus the
timing information needed to place them in time. It is immutable and can
be shared freely with rendering or playback code.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from smfnotes.config import DEFAULT_TEMPO
from smfnotes.models.events import TimeSignature
from smfnotes.models.note import Note
from smfnotes.utils import timing


@dataclass(frozen=True)
class TempoChange:
    """A set-tempo event placed at its absolute tick."""

    tick: int
    tempo: int  # microseconds per quarter note

    @property
    def bpm(self) -> float:
        return timing.tempo_to_bpm(self.tempo)


@dataclass(frozen=True)
class Track:
    """
    A decoded track.

    Attributes:
        name: Display name (track-name meta event, else the file name)
        division: Ticks per quarter note from the file header
        notes: Closed notes, ordered by note-on
        tempo_changes: Set-tempo events in stream order (advisory)
        time_signature: First time signature in the track, if any
        orphan_note_offs: Number of note-offs that had no pending note-on
    """

    name: str
    division: int
    notes: Tuple[Note, ...] = field(default_factory=tuple)
    tempo_changes: Tuple[TempoChange, ...] = field(default_factory=tuple)
    time_signature: Optional[TimeSignature] = None
    orphan_note_offs: int = 0

    @property
    def tempo(self) -> Optional[int]:
        """First set-tempo value in microseconds per quarter note, if any."""
        if not self.tempo_changes:
            return None
        return self.tempo_changes[0].tempo

    @property
    def note_count(self) -> int:
        return len(self.notes)

    @property
    def duration_ticks(self) -> int:
        """Tick of the last note-off (0 for an empty track)."""
        return max((n.off_tick for n in self.notes), default=0)

    @property
    def note_range(self) -> Optional[Tuple[int, int]]:
        """Lowest and highest note numbers, or None for an empty track."""
        if not self.notes:
            return None
        numbers = [n.number for n in self.notes]
        return min(numbers), max(numbers)

    def effective_tempo(self, tempo: Optional[int] = None) -> int:
        """
        Pick the tempo to convert with: explicit, then the track's, then 120 BPM.

        A zero set-tempo value from the file is skipped. An explicit tempo is
        returned as given and validated by the conversion.
        """
        if tempo is not None:
            return tempo
        if self.tempo:
            return self.tempo
        return DEFAULT_TEMPO

    def seconds_per_tick(self, tempo: Optional[int] = None) -> float:
        return timing.seconds_per_tick(self.effective_tempo(tempo), self.division)

    def ticks_to_seconds(self, ticks: int, tempo: Optional[int] = None) -> float:
        return timing.ticks_to_seconds(ticks, self.effective_tempo(tempo), self.division)

    def seconds_to_ticks(self, seconds: float, tempo: Optional[int] = None) -> float:
        return timing.seconds_to_ticks(seconds, self.effective_tempo(tempo), self.division)

    def note_times(self, note: Note, tempo: Optional[int] = None) -> Tuple[float, float]:
        """Start and end of a note in seconds."""
        return (
            self.ticks_to_seconds(note.on_tick, tempo),
            self.ticks_to_seconds(note.off_tick, tempo),
        )

    def notes_at(self, tick: int) -> List[Note]:
        """Notes sounding at an absolute tick."""
        return [n for n in self.notes if n.is_sounding_at(tick)]

    def notes_between(self, start_tick: int, end_tick: int) -> List[Note]:
        """Notes overlapping the half-open tick window [start_tick, end_tick)."""
        return [n for n in self.notes if n.on_tick < end_tick and n.off_tick > start_tick]


def note_range(tracks: List[Track]) -> Optional[Tuple[int, int]]:
    """Lowest and highest note numbers across several tracks."""
    ranges = [t.note_range for t in tracks if t.note_range is not None]
    if not ranges:
        return None
    return min(r[0] for r in ranges), max(r[1] for r in ranges)
