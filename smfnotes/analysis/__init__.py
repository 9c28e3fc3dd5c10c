"""Analysis of decoded event streams."""

from smfnotes.analysis.reconstructor import (
    NoteReconstructor,
    ReconstructionResult,
    build_track,
    reconstruct_notes,
)

__all__ = ["NoteReconstructor", "ReconstructionResult", "build_track", "reconstruct_notes"]
