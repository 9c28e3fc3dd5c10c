"""
Standard MIDI File reader.

Reads .mid files and turns them into immutable Track values.
"""

from pathlib import Path
from typing import List, Optional, Union

from smfnotes.analysis.reconstructor import build_track
from smfnotes.config import DecoderConfig
from smfnotes.formats.smf.chunks import HEADER_TAG
from smfnotes.formats.smf.parser import SMFParser
from smfnotes.models.track import Track


class SMFReader:
    """
    Reader for Format 0 Standard MIDI Files.

    Decodes the file and reconstructs its notes into a Track.

    Example:
        track = SMFReader.read("song.mid")
        print(f"{track.name}: {track.note_count} notes at {track.division} ticks/qn")
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()
        self.parser = SMFParser(self.config)

    @classmethod
    def read(cls, filepath: Union[str, Path], config: Optional[DecoderConfig] = None) -> Track:
        """
        Read a MIDI file and return its Track.

        Args:
            filepath: Path to .mid file
            config: Decoder options

        Returns:
            Decoded Track
        """
        reader = cls(config)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Track:
        """
        Parse a MIDI file.

        The file name is used as the track name when the track has no
        track-name meta event.

        Args:
            filepath: Path to .mid file

        Returns:
            Decoded Track
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        return self.parse_bytes(data, name=filepath.name)

    def parse_bytes(self, data: bytes, name: str = "") -> Track:
        """
        Parse MIDI data from bytes.

        Args:
            data: Raw file contents
            name: Fallback track name

        Returns:
            Decoded Track
        """
        header, events = self.parser.parse_bytes(data)

        return build_track(events, division=header.division, name=name)

    @classmethod
    def read_directory(
        cls, directory: Union[str, Path], config: Optional[DecoderConfig] = None
    ) -> List[Track]:
        """
        Read every MIDI file in a directory, in file name order.

        Args:
            directory: Directory to scan (not recursive)
            config: Decoder options

        Returns:
            One Track per file
        """
        return [cls.read(path, config) for path in cls.list_files(directory, config)]

    @classmethod
    def list_files(
        cls, directory: Union[str, Path], config: Optional[DecoderConfig] = None
    ) -> List[Path]:
        """
        List MIDI files in a directory by suffix.

        Args:
            directory: Directory to scan (not recursive)
            config: Supplies the accepted suffixes

        Returns:
            Sorted file paths
        """
        config = config or DecoderConfig()
        directory = Path(directory)

        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        suffixes = {s.lower() for s in config.midi_suffixes}
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in suffixes
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a Standard MIDI File.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with the MThd tag
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            return f.read(4) == HEADER_TAG

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a MIDI file from its header bytes only.

        Args:
            filepath: Path to .mid file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": False,
            "size": len(data),
        }

        if len(data) >= 4:
            info["header"] = data[:4].decode("ascii", errors="replace")
            info["valid"] = data[:4] == HEADER_TAG

        if len(data) >= 14:
            info["format"] = int.from_bytes(data[8:10], "big")
            info["track_count"] = int.from_bytes(data[10:12], "big")
            info["smpte"] = bool(data[12] & 0x80)
            info["division"] = int.from_bytes(data[12:14], "big")

        return info


def decode_track(data: bytes, name: str = "", config: Optional[DecoderConfig] = None) -> Track:
    """
    Convenience function to decode SMF bytes into a Track.

    Args:
        data: Raw file contents
        name: Fallback track name
        config: Decoder options

    Returns:
        Decoded Track
    """
    return SMFReader(config).parse_bytes(data, name=name)
