"""ChordNameFormatter: renders a ChordSymbol as display text."""

from __future__ import annotations

from typing import Final

from chordsheet.chord_models import ChordSymbol
from chordsheet.pitch_table import (
    NOTE_NAME_SPANISH,
    NOTE_TO_INDEX,
    QUALITY_LONG_NAME,
    QUALITY_SHORT_SYMBOL,
)
from chordsheet.transposer import transpose_note

STYLES: Final[frozenset[str]] = frozenset({"short", "long"})
LANGUAGES: Final[frozenset[str]] = frozenset(QUALITY_LONG_NAME)

NUMBER_TO_SUPERSCRIPT: Final[dict[int, str]] = {
    1: "¹", 2: "²", 3: "³", 4: "⁴", 5: "⁵", 6: "⁶", 7: "⁷", 8: "⁸", 9: "⁹",
}

_CLAUSES: Final[dict[str, dict[str, str]]] = {
    "en": {
        "alterations": " with altered tones ({})",
        "additions": " with added tones ({})",
        "bass": " over {}",
        "inversion": " ({} inversion)",
    },
    "es": {
        "alterations": " con alteraciones ({})",
        "additions": " con notas añadidas ({})",
        "bass": " con bajo en {}",
        "inversion": " ({} inversión)",
    },
}


def format_chord_name(
    chord: ChordSymbol,
    style: str = "short",
    transposition: int = 0,
    language: str = "en",
) -> str:
    """
    Render ``chord`` for display, transposed by ``transposition`` semitones.

    Short style: ``Cmaj7``, ``C(#5)``, ``Dm7²/G``. Modifiers are wrapped in
    parentheses so the result parses back to the same chord.
    Long style: ``"C major seventh over G (2nd inversion)"``; with
    ``language="es"`` the Spanish reading, ``"Do Mayor séptima con bajo en Sol"``.

    Entries without root or quality fall back to their raw text.

    Raises:
        ValueError: For an unknown style or language.
    """
    if style not in STYLES:
        raise ValueError(f"Unknown chord name style '{style}'. Use 'short' or 'long'.")
    if language not in LANGUAGES:
        supported = ", ".join(sorted(LANGUAGES))
        raise ValueError(f"Unknown language '{language}'. Use one of: {supported}.")

    if not chord.root or not chord.quality:
        return chord.raw or ""

    root = transpose_note(chord.root, transposition)
    bass = transpose_note(chord.bass, transposition) if chord.bass else None
    if bass is not None and NOTE_TO_INDEX.get(bass) == NOTE_TO_INDEX.get(root):
        bass = None

    if style == "short":
        return _short_name(chord, root, bass)
    return _long_name(chord, root, bass, language)


def _short_name(chord: ChordSymbol, root: str, bass: str | None) -> str:
    name = root + QUALITY_SHORT_SYMBOL.get(chord.quality or "", "")
    modifiers = [alt.token for alt in chord.alterations]
    modifiers += [f"add{degree}" for degree in chord.additions]
    if modifiers:
        name += f"({''.join(modifiers)})"
    if chord.inversion > 0 and chord.inversion in NUMBER_TO_SUPERSCRIPT:
        name += NUMBER_TO_SUPERSCRIPT[chord.inversion]
    if bass:
        name += f"/{bass}"
    return name


def _long_name(chord: ChordSymbol, root: str, bass: str | None, language: str) -> str:
    clauses = _CLAUSES[language]
    quality = chord.quality or ""
    name = f"{_note_name(root, language)} {QUALITY_LONG_NAME[language].get(quality, quality)}"

    if chord.alterations:
        name += clauses["alterations"].format(", ".join(alt.token for alt in chord.alterations))
    if chord.additions:
        name += clauses["additions"].format(", ".join(f"add{d}" for d in chord.additions))
    if bass:
        name += clauses["bass"].format(_note_name(bass, language))
    if chord.inversion > 0:
        name += clauses["inversion"].format(_ordinal(chord.inversion, language))
    return name


def _note_name(note: str, language: str) -> str:
    if language == "es":
        return NOTE_NAME_SPANISH.get(note, note)
    return note


def _ordinal(number: int, language: str) -> str:
    if language == "es":
        return f"{number}ª"
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"
