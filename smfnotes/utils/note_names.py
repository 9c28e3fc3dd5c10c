"""
Pitch names for MIDI note numbers.
"""

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def note_number_to_name(number: int) -> str:
    """
    Convert a MIDI note number to a pitch name.

    Octaves count from 0 at note 0, so middle C (60) is "C5".

    Args:
        number: MIDI note number (0-127)

    Returns:
        Name like "C5" or "F#3"
    """
    octave, pitch = divmod(number, 12)
    return f"{NOTE_NAMES[pitch]}{octave}"
