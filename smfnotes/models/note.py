"""
Note interval model.
"""

from dataclasses import dataclass

from smfnotes.utils.note_names import note_number_to_name

# off_tick of a note whose note-off has not been seen yet
OPEN = -1


@dataclass(frozen=True)
class Note:
    """
    A note as a closed interval in absolute ticks.

    A closed note has off_tick >= on_tick. A note-off on the same tick as
    its note-on gives a zero-length note, which is kept, so duration_ticks
    can be 0.

    Attributes:
        on_tick: Tick of the note-on
        off_tick: Tick of the matching note-off, OPEN while unmatched
        number: MIDI note number (0-127)
        velocity: Note-on velocity (0-127)
    """

    on_tick: int
    off_tick: int
    number: int
    velocity: int

    @property
    def is_open(self) -> bool:
        return self.off_tick == OPEN

    @property
    def name(self) -> str:
        """Pitch name, e.g. "C5" for note 60."""
        return note_number_to_name(self.number)

    @property
    def duration_ticks(self) -> int:
        if self.is_open:
            raise ValueError(f"Note {self.name} at tick {self.on_tick} is still open")
        return self.off_tick - self.on_tick

    def is_sounding_at(self, tick: int) -> bool:
        """Check whether the note sounds at an absolute tick (on inclusive, off exclusive)."""
        return not self.is_open and self.on_tick <= tick < self.off_tick
