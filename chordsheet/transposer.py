"""Transposition of note names, chords and whole songs."""

from __future__ import annotations

from dataclasses import replace
from typing import Final

from chordsheet.chord_models import ChordSymbol, ProcessedSong
from chordsheet.pitch_table import FLAT_NAMES, NOTE_TO_INDEX, SEMITONES_PER_OCTAVE, SHARP_NAMES

MAX_TRANSPOSITION: Final[int] = 12


def transpose_note(note: str, semitones: int) -> str:
    """
    Shift a pitch-class name by ``semitones``.

    A flat input ("Bb", "Eb") is answered with flat spelling, anything else
    with sharp spelling. Unknown names come back unchanged.

    >>> transpose_note("C", 2)
    'D'
    >>> transpose_note("Bb", 1)
    'B'
    """
    index = NOTE_TO_INDEX.get(note)
    if index is None:
        return note
    new_index = (index + semitones) % SEMITONES_PER_OCTAVE
    use_flats = len(note) > 1 and "b" in note[1:]
    return FLAT_NAMES[new_index] if use_flats else SHARP_NAMES[new_index]


def transpose_chord(chord: ChordSymbol, semitones: int) -> ChordSymbol:
    """Return a copy of ``chord`` with root and bass moved by ``semitones``."""
    if not chord.root:
        return chord
    return replace(
        chord,
        root=transpose_note(chord.root, semitones),
        bass=transpose_note(chord.bass, semitones) if chord.bass else None,
    )


def transpose_song(song: ProcessedSong, semitones: int) -> ProcessedSong:
    """
    Return a copy of ``song`` with every resolvable chord transposed.

    Annotations, ids and columns are kept as they are; ``raw`` still holds
    the text the chord was parsed from.
    """
    lines = tuple(
        replace(
            line,
            placements=tuple(
                p if p.is_annotation else replace(p, chord=transpose_chord(p.chord, semitones))
                for p in line.placements
            ),
        )
        for line in song.lines
    )
    return ProcessedSong(lines=lines)


class TranspositionControl:
    """
    Caller-side transposition offset, stepped one semitone at a time.

    The offset is kept within ±MAX_TRANSPOSITION.
    """

    def __init__(self, offset: int = 0) -> None:
        self.offset = max(-MAX_TRANSPOSITION, min(MAX_TRANSPOSITION, offset))

    def up(self) -> bool:
        """Raise by a semitone. Returns False when already at the limit."""
        if self.offset >= MAX_TRANSPOSITION:
            return False
        self.offset += 1
        return True

    def down(self) -> bool:
        """Lower by a semitone. Returns False when already at the limit."""
        if self.offset <= -MAX_TRANSPOSITION:
            return False
        self.offset -= 1
        return True

    def reset(self) -> bool:
        """Back to the original key. Returns whether the offset changed."""
        changed = self.offset != 0
        self.offset = 0
        return changed

    @property
    def label(self) -> str:
        """Display text: "Original", "+2" or "-3"."""
        if self.offset > 0:
            return f"+{self.offset}"
        if self.offset < 0:
            return str(self.offset)
        return "Original"
