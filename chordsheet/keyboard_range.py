"""KeyboardRangeCalculator: picks the keyboard window that shows a chord well."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Iterable

from chordsheet.pitch_table import IS_BLACK_KEY, SEMITONES_PER_OCTAVE, midi_to_note_name

# ── 88-key piano bounds ──────────────────────────────────────────────────────
PIANO_MIN_MIDI: Final[int] = 21   # A0
PIANO_MAX_MIDI: Final[int] = 108  # C8

#: Window shown when there is nothing to display (C3 to B5).
DEFAULT_WINDOW: Final[tuple[int, int]] = (48, 83)

WHITE_KEYS_PER_OCTAVE: Final[int] = 7


@dataclass(frozen=True)
class PianoKey:
    """
    One key of a rendered keyboard window.

    Attributes:
        midi:     Absolute pitch number.
        name:     Note name with octave, e.g. "C#3".
        is_black: True for the five accidentals of each octave.
        role:     "bass", "pressed" or None.
    """

    midi: int
    name: str
    is_black: bool
    role: str | None = None


@dataclass(frozen=True)
class KeyboardRange:
    """Inclusive window of absolute pitches [start, end]."""

    start: int
    end: int

    @property
    def white_key_count(self) -> int:
        return sum(
            1 for midi in range(self.start, self.end + 1)
            if not IS_BLACK_KEY[midi % SEMITONES_PER_OCTAVE]
        )

    def keys(self, pressed: Iterable[int] = (), bass: int | None = None) -> list[PianoKey]:
        """
        List every key in the window, marking pressed keys and the bass key.

        A key that is both bass and pressed is reported as bass.
        """
        pressed_set = set(pressed)
        keys: list[PianoKey] = []
        for midi in range(self.start, self.end + 1):
            if bass is not None and midi == bass:
                role: str | None = "bass"
            elif midi in pressed_set:
                role = "pressed"
            else:
                role = None
            keys.append(
                PianoKey(
                    midi=midi,
                    name=midi_to_note_name(midi),
                    is_black=IS_BLACK_KEY[midi % SEMITONES_PER_OCTAVE],
                    role=role,
                )
            )
        return keys


def calculate_keyboard_range(
    pitches: Iterable[int],
    min_white_keys: int = 20,
    padding: int = 5,
) -> KeyboardRange:
    """
    Compute the keyboard window for a set of absolute pitches.

    The window spans the pitches plus ``padding`` semitones on each side. When
    that is too narrow to show ``min_white_keys`` white keys, it is re-centred
    on the middle of the pitches and widened to
    ``ceil(min_white_keys × 12 / 7)`` semitones. The result is clamped to the
    88-key range.

    Args:
        pitches:        Absolute pitch numbers (e.g. ChordTones.layout).
        min_white_keys: Minimum number of white keys the window should show.
        padding:        Semitones of breathing room around the outer notes.

    Returns:
        KeyboardRange; DEFAULT_WINDOW when ``pitches`` is empty.
    """
    notes = list(pitches)
    if not notes:
        return KeyboardRange(*DEFAULT_WINDOW)

    lowest, highest = min(notes), max(notes)
    start = lowest - padding
    end = highest + padding

    required_span = math.ceil(min_white_keys * SEMITONES_PER_OCTAVE / WHITE_KEYS_PER_OCTAVE)
    if end - start < required_span:
        # Round half up, the way a keyboard view centres on a note.
        centre = math.floor((lowest + highest) / 2 + 0.5)
        start = centre - math.ceil(required_span / 2)
        end = centre + required_span // 2

    return KeyboardRange(
        start=max(PIANO_MIN_MIDI, start),
        end=min(PIANO_MAX_MIDI, end),
    )
