"""
Tick/time conversions.

Ticks are the unit of everything the decoder produces. Turning them into
wall-clock time takes the file's division (ticks per quarter note) and a
tempo in microseconds per quarter note:

    seconds_per_tick = tempo / (1_000_000 * division)

Example:
    division = 480, tempo = 500000 (120 BPM)
    ticks_to_seconds(480, 500000, 480) == 0.5
"""

import math


def seconds_per_tick(tempo: int, division: int) -> float:
    """
    Duration of one tick.

    Args:
        tempo: Microseconds per quarter note
        division: Ticks per quarter note

    Returns:
        Seconds per tick
    """
    if division <= 0:
        raise ValueError(f"Division must be positive, got {division}")
    if tempo <= 0:
        raise ValueError(f"Tempo must be positive, got {tempo}")
    return tempo / (1_000_000 * division)


def ticks_to_seconds(ticks: int, tempo: int, division: int) -> float:
    """Convert a tick count to seconds."""
    return ticks * seconds_per_tick(tempo, division)


def seconds_to_ticks(seconds: float, tempo: int, division: int) -> float:
    """Convert seconds to a (fractional) tick count. Inverse of ticks_to_seconds."""
    return seconds / seconds_per_tick(tempo, division)


def nearest_tick(seconds: float, tempo: int, division: int) -> int:
    """
    Convert seconds to the nearest whole tick.

    Halves round away from zero.
    """
    ticks = seconds_to_ticks(seconds, tempo, division)
    return int(math.copysign(math.floor(abs(ticks) + 0.5), ticks))


def tempo_to_bpm(tempo: int) -> float:
    """Convert microseconds per quarter note to beats per minute."""
    if tempo <= 0:
        raise ValueError(f"Tempo must be positive, got {tempo}")
    return 60_000_000 / tempo


def ticks_per_measure(division: int, beats_per_measure: int = 4) -> int:
    """Ticks in one measure of quarter-note beats (4/4 by default)."""
    return division * beats_per_measure


def measure_to_ticks(measure: int, division: int, beats_per_measure: int = 4) -> int:
    """Absolute tick at the start of a zero-based measure."""
    return measure * ticks_per_measure(division, beats_per_measure)


def ticks_to_measure(ticks: int, division: int, beats_per_measure: int = 4) -> int:
    """Zero-based measure containing the given absolute tick."""
    return ticks // ticks_per_measure(division, beats_per_measure)
