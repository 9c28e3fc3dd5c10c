"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from builders import MINIMAL_EVENTS, end_of_track, meta, note_off, note_on, smf


@pytest.fixture
def minimal_smf_data():
    """Return bytes of a one-note Format 0 file at 480 ticks/qn."""
    return smf(*MINIMAL_EVENTS)


@pytest.fixture
def song_smf_data():
    """Return bytes of a short named file with tempo and time signature."""
    return smf(
        meta(0, 0x03, b"Lead"),
        meta(0, 0x51, bytes([0x07, 0xA1, 0x20])),  # 500000 us/qn
        meta(0, 0x58, bytes([3, 2, 24, 8])),  # 3/4
        note_on(0, 60, 100),
        note_off(240, 60),
        note_on(0, 64, 90),
        note_off(240, 64),
        note_on(0, 67, 80),
        note_off(480, 67),
        end_of_track(),
        division=480,
    )


@pytest.fixture
def midi_file(tmp_path, minimal_smf_data):
    """Return path to a minimal .mid file on disk."""
    path = tmp_path / "minimal.mid"
    path.write_bytes(minimal_smf_data)
    return path


@pytest.fixture
def song_file(tmp_path, song_smf_data):
    """Return path to the named song file on disk."""
    path = tmp_path / "song.mid"
    path.write_bytes(song_smf_data)
    return path
