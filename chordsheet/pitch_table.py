"""Static pitch-class and chord-quality tables shared by the whole engine."""

from types import MappingProxyType
from typing import Final, Mapping

# ── Pitch classes ───────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE: Final[int] = 12

#: Every spelling the parser accepts, enharmonic extras included.
NOTE_TO_INDEX: Final[Mapping[str, int]] = MappingProxyType({
    "C": 0, "B#": 0, "C#": 1, "Db": 1, "D": 2, "D#": 3, "Eb": 3, "E": 4, "Fb": 4,
    "F": 5, "E#": 5, "F#": 6, "Gb": 6, "G": 7, "G#": 8, "Ab": 8, "A": 9,
    "A#": 10, "Bb": 10, "B": 11, "Cb": 11,
})

SHARP_NAMES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
FLAT_NAMES: Final[tuple[str, ...]] = (
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
)

IS_BLACK_KEY: Final[tuple[bool, ...]] = (
    False, True, False, True, False, False, True, False, True, False, True, False,
)

# ── Chord qualities ─────────────────────────────────────────────────────────

#: Canonical quality id → ascending semitone template (first element always 0).
QUALITY_INTERVALS: Final[Mapping[str, tuple[int, ...]]] = MappingProxyType({
    "Mayor": (0, 4, 7),
    "Menor": (0, 3, 7),
    "Power": (0, 7),
    "Disminuido": (0, 3, 6),
    "Aumentado": (0, 4, 8),
    "Sus2": (0, 2, 7),
    "Sus4": (0, 5, 7),
    "Maj7": (0, 4, 7, 11),
    "Min7": (0, 3, 7, 10),
    "Dom7": (0, 4, 7, 10),
    "Sixth": (0, 4, 7, 9),
    "Min6": (0, 3, 7, 9),
    "HalfDim7": (0, 3, 6, 10),
    "Dim7": (0, 3, 6, 9),
    "MinMaj7": (0, 3, 7, 11),
    "SixNine": (0, 4, 9, 14),
    "Dom7Sus4": (0, 5, 7, 10),
    "Dom7Sus2": (0, 2, 7, 10),
    "Add9": (0, 4, 7, 14),
    "Add11": (0, 4, 5, 7),
    "Maj9": (0, 4, 7, 11, 14),
    "MinAdd9": (0, 3, 7, 14),
    "Dom7b9": (0, 4, 7, 10, 13),
    "Dom7s9": (0, 4, 7, 10, 15),
    "Dom9": (0, 4, 7, 10, 14),
    "Min9": (0, 3, 7, 10, 14),
    "Dom13": (0, 4, 7, 10, 14, 21),
    "Min11": (0, 3, 7, 10, 14, 17),
    "Maj7s11": (0, 4, 7, 11, 18),
    "Dom9Sus4": (0, 5, 7, 10, 14),
})

#: Written suffix → quality id. Keys never contain parentheses or whitespace
#: because the parser strips both before matching. Order breaks length ties.
SUFFIX_TO_QUALITY: Final[Mapping[str, str]] = MappingProxyType({
    "maj7#11": "Maj7s11", "M7#11": "Maj7s11",
    "min7b5": "HalfDim7", "minadd9": "MinAdd9",
    "mmaj7": "MinMaj7", "mM7": "MinMaj7",
    "maj7": "Maj7", "M7": "Maj7",
    "maj9": "Maj9",
    "madd9": "MinAdd9",
    "m7b5": "HalfDim7", "ø7": "HalfDim7", "ø": "HalfDim7",
    "min7": "Min7", "m7": "Min7",
    "min6": "Min6", "m6": "Min6",
    "min9": "Min9", "m9": "Min9",
    "min11": "Min11", "m11": "Min11",
    "dim7": "Dim7", "°7": "Dim7",
    "7sus4": "Dom7Sus4", "7sus2": "Dom7Sus2", "9sus4": "Dom9Sus4",
    "6/9": "SixNine", "69": "SixNine",
    "add11": "Add11", "add4": "Add11",
    "add9": "Add9", "add2": "Add9",
    "sus4": "Sus4", "sus2": "Sus2", "sus": "Sus4",
    "dim": "Disminuido", "°": "Disminuido",
    "aug": "Aumentado", "+": "Aumentado",
    "7b9": "Dom7b9", "7#9": "Dom7s9",
    "13": "Dom13", "9": "Dom9", "7": "Dom7", "6": "Sixth", "5": "Power",
    "min": "Menor", "m": "Menor",
    "M": "Mayor", "": "Mayor",
})

#: (quality id, modifier token) → quality id that already contains the
#: modifier. Dom7 + b9 is written "7b9", so it is stored as Dom7b9.
COMPOUND_QUALITIES: Final[Mapping[tuple[str, str], str]] = MappingProxyType({
    ("Dom7", "b9"): "Dom7b9",
    ("Dom7", "#9"): "Dom7s9",
    ("Min7", "b5"): "HalfDim7",
    ("Maj7", "#11"): "Maj7s11",
    ("Menor", "add9"): "MinAdd9",
    ("Mayor", "add9"): "Add9",
    ("Mayor", "add11"): "Add11",
})

#: Quality id → suffix used by the short chord name. Every symbol parses back
#: to its own quality.
QUALITY_SHORT_SYMBOL: Final[Mapping[str, str]] = MappingProxyType({
    "Mayor": "", "Menor": "m", "Power": "5", "Disminuido": "dim", "Aumentado": "aug",
    "Sus2": "sus2", "Sus4": "sus4", "Maj7": "maj7", "Min7": "m7", "Dom7": "7",
    "Sixth": "6", "Min6": "m6", "HalfDim7": "m7b5", "Dim7": "dim7",
    "MinMaj7": "m(maj7)", "SixNine": "6/9", "Dom7Sus4": "7sus4", "Dom7Sus2": "7sus2",
    "Add9": "add9", "Add11": "add11", "Maj9": "maj9", "MinAdd9": "madd9",
    "Dom7b9": "7b9", "Dom7s9": "7#9", "Dom9": "9", "Min9": "m9", "Dom13": "13",
    "Min11": "m11", "Maj7s11": "maj7#11", "Dom9Sus4": "9sus4",
})

QUALITY_LONG_NAME: Final[Mapping[str, Mapping[str, str]]] = MappingProxyType({
    "en": MappingProxyType({
        "Mayor": "major", "Menor": "minor", "Power": "power chord",
        "Disminuido": "diminished", "Aumentado": "augmented",
        "Sus2": "suspended second", "Sus4": "suspended fourth",
        "Maj7": "major seventh", "Min7": "minor seventh", "Dom7": "dominant seventh",
        "Sixth": "sixth", "Min6": "minor sixth", "HalfDim7": "half-diminished seventh",
        "Dim7": "diminished seventh", "MinMaj7": "minor major seventh",
        "SixNine": "six-nine", "Dom7Sus4": "seventh suspended fourth",
        "Dom7Sus2": "seventh suspended second", "Add9": "added ninth",
        "Add11": "added eleventh", "Maj9": "major ninth", "MinAdd9": "minor added ninth",
        "Dom7b9": "seventh flat nine", "Dom7s9": "seventh sharp nine", "Dom9": "ninth",
        "Min9": "minor ninth", "Dom13": "thirteenth", "Min11": "minor eleventh",
        "Maj7s11": "major seventh sharp eleven", "Dom9Sus4": "ninth suspended fourth",
    }),
    "es": MappingProxyType({
        "Mayor": "Mayor", "Menor": "menor", "Power": "5",
        "Disminuido": "disminuido", "Aumentado": "aumentado",
        "Sus2": "suspendido 2", "Sus4": "suspendido 4",
        "Maj7": "Mayor séptima", "Min7": "menor séptima", "Dom7": "séptima (Dominante)",
        "Sixth": "sexta", "Min6": "menor sexta", "HalfDim7": "semidisminuido 7",
        "Dim7": "disminuido 7", "MinMaj7": "menor (con 7ma Mayor)",
        "SixNine": "sexta/novena", "Dom7Sus4": "séptima sus4", "Dom7Sus2": "séptima sus2",
        "Add9": "con novena añadida", "Add11": "con undécima añadida",
        "Maj9": "Mayor novena", "MinAdd9": "menor con novena añadida",
        "Dom7b9": "séptima con novena bemol", "Dom7s9": "séptima con novena sostenida",
        "Dom9": "novena", "Min9": "menor novena", "Dom13": "treceava",
        "Min11": "menor onceava", "Maj7s11": "mayor séptima con onceava sostenida",
        "Dom9Sus4": "novena suspendida 4",
    }),
})

NOTE_NAME_SPANISH: Final[Mapping[str, str]] = MappingProxyType({
    "C": "Do", "C#": "Do sostenido", "Db": "Re bemol",
    "D": "Re", "D#": "Re sostenido", "Eb": "Mi bemol",
    "E": "Mi", "F": "Fa", "F#": "Fa sostenido", "Gb": "Sol bemol",
    "G": "Sol", "G#": "Sol sostenido", "Ab": "La bemol",
    "A": "La", "A#": "La sostenido", "Bb": "Si bemol",
    "B": "Si",
})

# ── Modifiers ───────────────────────────────────────────────────────────────

#: Scale degree → natural interval above the root.
DEGREE_TO_INTERVAL: Final[Mapping[int, int]] = MappingProxyType({
    1: 0, 3: 4, 4: 5, 5: 7, 6: 9, 7: 11, 9: 14, 11: 17, 13: 21,
})

#: (degree, semitone delta) pairs accepted as alterations.
SUPPORTED_ALTERATIONS: Final[frozenset[tuple[int, int]]] = frozenset({
    (5, -1), (5, 1), (9, -1), (9, 1), (11, 1), (13, -1),
})

SUPPORTED_ADDITIONS: Final[frozenset[int]] = frozenset({9, 11, 13})


def midi_to_note_name(midi_note: int, flats: bool = False) -> str:
    """
    Convert an absolute pitch number to a note name with octave.

    MIDI octave numbering: C-1 = 0, C0 = 12, ... C4 (Middle C) = 60.

    Args:
        midi_note: Absolute pitch number.
        flats:     Spell accidentals with flats instead of sharps.

    Returns:
        Note name with octave, e.g. "C4" or "Eb2".
    """
    names = FLAT_NAMES if flats else SHARP_NAMES
    octave = (midi_note // SEMITONES_PER_OCTAVE) - 1
    return f"{names[midi_note % SEMITONES_PER_OCTAVE]}{octave}"
