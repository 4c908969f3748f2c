"""Harmonic analysis of chords within a key, and reharmonization suggestions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from chordsheet.chord_models import ChordSymbol
from chordsheet.chord_parser import parse_chord
from chordsheet.name_formatter import format_chord_name
from chordsheet.pitch_table import FLAT_NAMES, NOTE_TO_INDEX, QUALITY_INTERVALS, SEMITONES_PER_OCTAVE
from chordsheet.tone_resolver import resolve_chord_tones
from chordsheet.transposer import transpose_note

# ── Scale tables ─────────────────────────────────────────────────────────────
MAJOR_SCALE: Final[tuple[int, ...]] = (0, 2, 4, 5, 7, 9, 11)
MINOR_SCALE: Final[tuple[int, ...]] = (0, 2, 3, 5, 7, 8, 10)

MAJOR_DEGREES: Final[tuple[str, ...]] = ("I", "ii", "iii", "IV", "V", "vi", "vii°")
MINOR_DEGREES: Final[tuple[str, ...]] = ("i", "ii°", "bIII", "iv", "v", "bVI", "bVII")

TONIC: Final[frozenset[str]] = frozenset({"I", "vi", "i", "bIII", "bVI"})
SUBDOMINANT: Final[frozenset[str]] = frozenset({"IV", "ii", "iv", "ii°"})
DOMINANT: Final[frozenset[str]] = frozenset({"V", "vii°", "v"})

#: Qualities that carry a minor third and a minor seventh over the root.
MINOR_QUALITIES: Final[frozenset[str]] = frozenset(
    q for q, iv in QUALITY_INTERVALS.items() if 3 in iv and 6 not in iv
)
#: Qualities with a major third and a minor seventh (dominant family).
DOMINANT_QUALITIES: Final[frozenset[str]] = frozenset(
    q for q, iv in QUALITY_INTERVALS.items() if 4 in iv and 10 in iv
)

# Borrowed chords recognised in a major key: interval → (roman, required qualities).
_MODAL_INTERCHANGE: Final[dict[int, tuple[str, frozenset[str] | None]]] = {
    3: ("bIIImaj7", None),
    5: ("iv", MINOR_QUALITIES),
    8: ("bVImaj7", None),
    10: ("bVII7", DOMINANT_QUALITIES),
}


@dataclass(frozen=True)
class Key:
    """A tonal centre, e.g. Key("G") or Key("A", "minor")."""

    tonic: str
    scale: str = "major"

    def __post_init__(self) -> None:
        if self.tonic not in NOTE_TO_INDEX:
            raise ValueError(f"Unknown key tonic '{self.tonic}'.")
        if self.scale not in ("major", "minor"):
            raise ValueError(f"Unknown scale '{self.scale}'. Use 'major' or 'minor'.")

    @property
    def is_major(self) -> bool:
        return self.scale == "major"

    @property
    def steps(self) -> tuple[int, ...]:
        return MAJOR_SCALE if self.is_major else MINOR_SCALE

    @property
    def degrees(self) -> tuple[str, ...]:
        return MAJOR_DEGREES if self.is_major else MINOR_DEGREES

    def degree_root(self, roman: str) -> str | None:
        """Root name of the diatonic chord ``roman`` ("ii", "V"...)."""
        if roman not in self.degrees:
            return None
        return transpose_note(self.tonic, self.steps[self.degrees.index(roman)])


@dataclass(frozen=True)
class ChordFunction:
    """Where a chord sits in a key: degree, roman numeral and harmonic function."""

    degree: str
    roman: str
    function: str


@dataclass(frozen=True)
class Suggestion:
    """A replacement or passing chord, with the technique that produced it."""

    chord: ChordSymbol
    technique: str
    justification: str


def _function_of(roman: str) -> str:
    if roman in TONIC:
        return "Tonic"
    if roman in SUBDOMINANT:
        return "Subdominant"
    if roman in DOMINANT:
        return "Dominant"
    return "Transition"


def _interval_above(key: Key, chord: ChordSymbol) -> int | None:
    root_pc = NOTE_TO_INDEX.get(chord.root or "")
    if root_pc is None:
        return None
    return (root_pc - NOTE_TO_INDEX[key.tonic]) % SEMITONES_PER_OCTAVE


def analyze_chord(chord: ChordSymbol, key: Key) -> ChordFunction | None:
    """
    Place ``chord`` in ``key``.

    Looks, in order, for a borrowed minor iv (major keys), a secondary
    dominant (dominant-family chords other than V), a diatonic degree, and
    the remaining borrowed chords bIIImaj7, bVImaj7 and bVII7.

    Returns:
        ChordFunction, or None when the chord has no root or fits none of the
        patterns.
    """
    interval = _interval_above(key, chord)
    if interval is None:
        return None

    def found(degree: str, roman: str) -> ChordFunction:
        return ChordFunction(degree=degree, roman=roman, function=_function_of(roman))

    if key.is_major and interval == 5 and chord.quality in MINOR_QUALITIES:
        return found("iv", "iv")

    if chord.quality in DOMINANT_QUALITIES and interval != key.steps[4]:
        root_pc = NOTE_TO_INDEX[chord.root or ""]
        for step, roman in zip(key.steps[1:], key.degrees[1:]):
            target = (NOTE_TO_INDEX[key.tonic] + step) % SEMITONES_PER_OCTAVE
            if (target + 7) % SEMITONES_PER_OCTAVE == root_pc:
                return found(f"V7/{roman}", f"V7/{roman}")

    if interval in key.steps:
        index = key.steps.index(interval)
        return found(str(index + 1), key.degrees[index])

    if key.is_major and interval in _MODAL_INTERCHANGE:
        roman, qualities = _MODAL_INTERCHANGE[interval]
        if qualities is None or chord.quality in qualities:
            return found(roman, roman)

    return None


# ── Suggestion helpers ───────────────────────────────────────────────────────

def _suggest(text: str, technique: str, justification: str) -> list[Suggestion]:
    chord = parse_chord(text)
    if chord is None:
        return []
    return [Suggestion(chord=chord, technique=technique, justification=justification)]


def _unique(suggestions: list[Suggestion], exclude: ChordSymbol | None = None) -> list[Suggestion]:
    seen = {format_chord_name(exclude)} if exclude is not None else set()
    unique: list[Suggestion] = []
    for suggestion in suggestions:
        name = format_chord_name(suggestion.chord)
        if name not in seen:
            seen.add(name)
            unique.append(suggestion)
    return unique


def _diatonic_substitutions(chord: ChordSymbol, analysis: ChordFunction, key: Key) -> list[Suggestion]:
    if not key.is_major:
        return []
    out: list[Suggestion] = []
    root = chord.root or ""

    def degree(roman: str, suffix: str, why: str, bass: str | None = None) -> None:
        degree_root = key.degree_root(roman)
        if degree_root is None:
            return
        text = f"{degree_root}{suffix}" + (f"/{bass}" if bass else "")
        out.extend(_suggest(text, "Diatonic substitution", why))

    if analysis.function == "Tonic":
        if analysis.roman == "I":
            degree("I", "maj7", "First inversion for a melodic bass line.", transpose_note(root, 4))
        if analysis.roman != "iii":
            degree("iii", "m7", "Relative tonic substitute.")
        if analysis.roman != "vi":
            degree("vi", "m7", "Relative tonic substitute.")
    elif analysis.function == "Subdominant" and analysis.roman != "ii":
        degree("ii", "m7", "Relative subdominant substitute.")
    elif analysis.roman == "V":
        degree("V", "7", "First inversion leading into I.", transpose_note(root, 4))
    return out


def _tritone_substitution(chord: ChordSymbol) -> list[Suggestion]:
    if 10 not in QUALITY_INTERVALS.get(chord.quality or "", ()):
        return []
    return _suggest(
        f"{transpose_note(chord.root or '', 6)}7",
        "Tritone substitution",
        "Creates a chromatic bass line.",
    )


def _colour_sevenths(chord: ChordSymbol) -> list[Suggestion]:
    root = chord.root or ""
    if chord.quality == "Mayor":
        return _suggest(f"{root}maj7", "Colour (jazz/soul)", "Adds a major seventh for a richer sound.")
    if chord.quality == "Menor":
        return _suggest(f"{root}m7", "Colour (jazz/soul)", "Adds a minor seventh, a staple of the style.")
    return []


def _extensions(chord: ChordSymbol, analysis: ChordFunction, key: Key) -> list[Suggestion]:
    tones = resolve_chord_tones(chord)
    root_pc = NOTE_TO_INDEX.get(chord.root or "")
    if tones.is_empty or root_pc is None:
        return []
    intervals = {(tone - root_pc) % SEMITONES_PER_OCTAVE for tone in tones.pressed}
    root = chord.root or ""

    if 11 in intervals and 4 in intervals:
        return _suggest(f"{root}maj9", "Extension", "Adds the ninth for a more sophisticated sound.")
    if 10 in intervals and 4 in intervals:
        return _suggest(f"{root}9", "Extension", "Adds the ninth over the dominant seventh.")
    if 10 in intervals and 3 in intervals:
        if analysis.roman == "iii" and key.is_major:
            return _suggest(f"{root}m7(b9)", "Extension", "Adds the flat ninth that fits the iii degree.")
        return _suggest(f"{root}m9", "Extension", "Adds the ninth for a neo-soul/jazz colour.")
    return []


def _borrowed_root(tonic: str, semitones: int) -> str:
    """Borrowed degrees are spelled with flats: bVII of C is Bb, not A#."""
    return FLAT_NAMES[(NOTE_TO_INDEX[tonic] + semitones) % SEMITONES_PER_OCTAVE]


def _modal_interchange(analysis: ChordFunction, key: Key) -> list[Suggestion]:
    if not key.is_major:
        return []
    tonic = key.tonic
    if analysis.roman == "IV":
        return _suggest(
            f"{_borrowed_root(tonic, 5)}m7", "Modal interchange", "Borrowed from the parallel minor (iv7)."
        )
    if analysis.roman == "V":
        return _suggest(
            f"{_borrowed_root(tonic, 10)}7", "Modal interchange", "Backdoor dominant (bVII7), a soft resolution to I."
        ) + _suggest(
            f"{_borrowed_root(tonic, 8)}maj7", "Modal interchange", "Deceptive resolution (bVImaj7)."
        )
    return []


def suggest_substitutions(chord: ChordSymbol, key: Key) -> list[Suggestion]:
    """
    Reharmonization ideas for a single chord in ``key``.

    Combines diatonic substitutions, tritone substitution, colour sevenths,
    extensions and modal interchange. Suggestions identical to the chord
    itself or to an earlier suggestion are dropped.
    """
    analysis = analyze_chord(chord, key)
    if analysis is None:
        return []

    suggestions = (
        _diatonic_substitutions(chord, analysis, key)
        + _tritone_substitution(chord)
        + _colour_sevenths(chord)
        + _extensions(chord, analysis, key)
        + _modal_interchange(analysis, key)
    )
    return _unique(suggestions, exclude=chord)


def suggest_passing_chords(previous: ChordSymbol, following: ChordSymbol, key: Key) -> list[Suggestion]:
    """
    Chords that could be slotted between ``previous`` and ``following``.

    Covers the secondary dominant of the target, a diminished passing chord
    for whole-step root motion, inversion bass walks from I to vi and the
    related ii of the target.
    """
    prev_analysis = analyze_chord(previous, key)
    next_analysis = analyze_chord(following, key)
    if not previous.root or not following.root or next_analysis is None:
        return []

    resolves_home = next_analysis.roman in ("I", "i", "vii°")
    target_name = format_chord_name(following)
    suggestions: list[Suggestion] = []

    if not resolves_home:
        suggestions += _suggest(
            f"{transpose_note(following.root, 7)}7",
            "Secondary dominant",
            f"Prepares {target_name}.",
        )

    prev_pc = NOTE_TO_INDEX.get(previous.root)
    next_pc = NOTE_TO_INDEX.get(following.root)
    if prev_pc is not None and next_pc is not None and (prev_pc + 2) % SEMITONES_PER_OCTAVE == next_pc:
        suggestions += _suggest(
            f"{transpose_note(previous.root, 1)}dim7",
            "Diminished passing chord",
            "Smooth chromatic connection.",
        )

    if prev_analysis is not None and prev_analysis.roman == "I" and next_analysis.roman == "vi":
        third = transpose_note(previous.root, 4)
        suggestions += _suggest(
            f"{previous.root}/{third}",
            "Inversion passing bass",
            f"I in first inversion ({previous.root}/{third}) for a melodic bass.",
        )
        dominant = transpose_note(previous.root, 7)
        dominant_third = transpose_note(dominant, 4)
        suggestions += _suggest(
            f"{dominant}7/{dominant_third}",
            "Chromatic passing bass",
            f"V7 in first inversion ({dominant}7/{dominant_third}) to connect.",
        )

    if not resolves_home:
        target_is_major = following.quality == "Mayor" or following.quality in DOMINANT_QUALITIES
        suffix = "m7" if target_is_major else "m7b5"
        suggestions += _suggest(
            f"{transpose_note(following.root, 2)}{suffix}",
            "Related ii",
            f"Starts a ii-V that resolves to {target_name}.",
        )

    return _unique(suggestions)
