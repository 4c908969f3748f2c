"""ChordToneResolver: expands a ChordSymbol into absolute pitch numbers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np

from chordsheet.chord_models import ChordSymbol
from chordsheet.pitch_table import (
    DEGREE_TO_INTERVAL,
    NOTE_TO_INDEX,
    QUALITY_INTERVALS,
    SEMITONES_PER_OCTAVE,
)
from chordsheet.transposer import transpose_note

#: Every chord is stacked on its root in this register (pitch class + 36).
ANCHOR_OCTAVE: Final[int] = 3


def pitch_class_to_absolute(pitch_class: int, octave: int = ANCHOR_OCTAVE) -> int:
    """Place a pitch class (0-11) in ``octave``: pitch class + 12 × octave."""
    return pitch_class + SEMITONES_PER_OCTAVE * octave


@dataclass(frozen=True)
class ChordTones:
    """
    Concrete pitches of one chord.

    Attributes:
        pressed: Chord tones after alterations, additions and inversion,
                 ascending.
        bass:    Bass pitch sitting strictly below the root-position stack,
                 or None when nothing could be resolved.
        layout:  Union of ``pressed`` and ``bass``, ascending; used to size
                 the keyboard view.
    """

    pressed: tuple[int, ...] = ()
    bass: int | None = None
    layout: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.pressed


def resolve_chord_tones(chord: ChordSymbol, transposition: int = 0) -> ChordTones:
    """
    Resolve ``chord`` (shifted by ``transposition`` semitones) to pitches.

    Steps
    -----
    1. Stack the quality's interval template on the anchored root.
    2. Alterations move the existing tone of that degree, or add it altered
       when the chord does not contain the degree.
    3. Additions append the degree's natural interval.
    4. The bass (slash bass or root) goes in the octave strictly below the
       lowest root-position tone.
    5. The stack is rotated ``inversion`` times: lowest tone up an octave.

    Unknown roots or qualities yield an empty ChordTones.
    """
    if not chord.root or not chord.quality:
        return ChordTones()

    root = transpose_note(chord.root, transposition)
    root_pc = NOTE_TO_INDEX.get(root)
    intervals = QUALITY_INTERVALS.get(chord.quality)
    if root_pc is None or intervals is None:
        return ChordTones()

    anchor = pitch_class_to_absolute(root_pc)
    tones = anchor + np.asarray(intervals, dtype=int)

    for alteration in chord.alterations:
        natural = DEGREE_TO_INTERVAL.get(alteration.degree)
        if natural is None:
            continue
        matches = np.flatnonzero((tones - anchor) % SEMITONES_PER_OCTAVE == natural % SEMITONES_PER_OCTAVE)
        if matches.size:
            tones[matches[0]] += alteration.delta
        else:
            tones = np.append(tones, anchor + natural + alteration.delta)

    for degree in chord.additions:
        interval = DEGREE_TO_INTERVAL.get(degree)
        if interval is not None:
            tones = np.append(tones, anchor + interval)

    fundamental: list[int] = np.unique(tones).tolist()

    bass_name = transpose_note(chord.bass, transposition) if chord.bass else root
    bass = _place_bass(bass_name, lowest=fundamental[0])
    pressed = _invert(fundamental, chord.inversion)

    layout = sorted(set(pressed) | ({bass} if bass is not None else set()))
    return ChordTones(pressed=tuple(pressed), bass=bass, layout=tuple(layout))


# ── Private helpers ──────────────────────────────────────────────────────────

def _place_bass(bass_name: str, lowest: int) -> int | None:
    """Put ``bass_name`` in the nearest octave strictly below ``lowest``."""
    pitch_class = NOTE_TO_INDEX.get(bass_name)
    if pitch_class is None:
        return None
    bass = pitch_class + (lowest // SEMITONES_PER_OCTAVE) * SEMITONES_PER_OCTAVE
    if bass >= lowest:
        bass -= SEMITONES_PER_OCTAVE
    return bass


def _invert(tones: list[int], inversion: int) -> list[int]:
    """Rotate the stack ``inversion`` times; values past the chord size keep wrapping."""
    voiced = sorted(tones)
    for _ in range(max(inversion, 0)):
        lowest = voiced.pop(0)
        voiced.append(lowest + SEMITONES_PER_OCTAVE)
        voiced.sort()
    return voiced
