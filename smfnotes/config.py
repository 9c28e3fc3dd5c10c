"""
Decoder configuration.
"""

from dataclasses import dataclass
from typing import Tuple

# 120 BPM, the SMF default when a file carries no set-tempo event
DEFAULT_TEMPO = 500000


@dataclass
class DecoderConfig:
    """
    Options controlling how a file is decoded.

    Attributes:
        note_on_zero_velocity_as_off: Emit note-on events with velocity 0
            as note-offs. Off by default, so every 0x9n status is a note-on.
        midi_suffixes: File suffixes picked up when scanning a directory
    """

    note_on_zero_velocity_as_off: bool = False
    midi_suffixes: Tuple[str, ...] = (".mid", ".midi")
