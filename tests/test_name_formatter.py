"""Unit tests for format_chord_name."""

import itertools

import pytest

from chordsheet.chord_models import ChordSymbol
from chordsheet.chord_parser import parse_chord
from chordsheet.name_formatter import format_chord_name
from chordsheet.pitch_table import NOTE_TO_INDEX, SUFFIX_TO_QUALITY


def _chord(token: str) -> ChordSymbol:
    chord = parse_chord(token)
    assert chord is not None, token
    return chord


# ── Short style ──────────────────────────────────────────────────────────────

def test_short_name_plain_chords() -> None:
    assert format_chord_name(_chord("Cmaj7")) == "Cmaj7"
    assert format_chord_name(_chord("G/B")) == "G/B"
    assert format_chord_name(_chord("Am")) == "Am"


def test_short_name_normalises_aliases() -> None:
    assert format_chord_name(_chord("CM7")) == "Cmaj7"
    assert format_chord_name(_chord("Bø7")) == "Bm7b5"
    assert format_chord_name(_chord("F+")) == "Faug"


def test_short_name_wraps_modifiers() -> None:
    assert format_chord_name(_chord("C7#5")) == "C7(#5)"
    assert format_chord_name(_chord("C#5")) == "C#5"
    assert format_chord_name(_chord("Am7add11")) == "Am7(add11)"


def test_short_name_with_inversion_and_bass() -> None:
    assert format_chord_name(_chord("Dm7²/G")) == "Dm7²/G"


def test_bass_equal_to_root_is_dropped() -> None:
    assert format_chord_name(_chord("C/C")) == "C"


def test_short_name_transposed() -> None:
    assert format_chord_name(_chord("Bbm7"), transposition=2) == "Cm7"
    assert format_chord_name(_chord("G/B"), transposition=-2) == "F/A"


def test_annotation_falls_back_to_raw_text() -> None:
    assert format_chord_name(ChordSymbol.annotation("N.C.")) == "N.C."
    assert format_chord_name(ChordSymbol.annotation("[Chorus]"), style="long") == "[Chorus]"


@pytest.mark.parametrize(
    "token",
    [
        "Cmaj7",
        "G/B",
        "Am7b5",
        "E7(#9)",
        "C9(#11b13)",
        "Bbm(maj7)/F",
        "F#7sus4",
        "C6/9",
        "Ebm7²",
        "G7(b9)",
        "Cm(add11)",
        "Csus(add9)",
        "C(#5)",
        "Dbmaj7#11",
    ],
)
def test_short_name_parses_back_to_same_chord(token: str) -> None:
    chord = _chord(token)
    again = parse_chord(format_chord_name(chord))
    assert again is not None
    assert (again.root, again.quality, again.bass) == (chord.root, chord.quality, chord.bass)
    assert again.alterations == chord.alterations
    assert again.additions == chord.additions
    assert again.inversion == chord.inversion


MODIFIER_TOKENS = ("b5", "#5", "b9", "#9", "#11", "b13", "add9", "add11", "add13")


def _signature(chord: ChordSymbol) -> tuple:
    """Chord content with note spelling ignored (Cb and B compare equal)."""
    return (
        NOTE_TO_INDEX[chord.root or ""],
        chord.quality,
        NOTE_TO_INDEX[chord.bass] if chord.bass else None,
        chord.alterations,
        chord.additions,
        chord.inversion,
    )


def test_short_name_round_trips_every_suffix_and_modifier_pair() -> None:
    mismatches: list[tuple[str, str]] = []
    for suffix in SUFFIX_TO_QUALITY:
        for first, second in itertools.product(MODIFIER_TOKENS, repeat=2):
            for template in ("C{}{}{}", "C{}({}{})", "C{}{}{}/E", "C{}({}{})²"):
                token = template.format(suffix, first, second)
                chord = parse_chord(token)
                if chord is None:
                    continue
                name = format_chord_name(chord)
                again = parse_chord(name)
                if again is None or _signature(again) != _signature(chord):
                    mismatches.append((token, name))
    assert mismatches == []


# ── Long style ───────────────────────────────────────────────────────────────

def test_long_name_english() -> None:
    assert format_chord_name(_chord("Cmaj7"), style="long") == "C major seventh"
    assert format_chord_name(_chord("Cmaj7²/G"), style="long") == (
        "C major seventh over G (2nd inversion)"
    )


def test_long_name_modifier_clauses() -> None:
    assert format_chord_name(_chord("G7(b13)"), style="long") == (
        "G dominant seventh with altered tones (b13)"
    )
    assert format_chord_name(_chord("D(add13)"), style="long") == (
        "D major with added tones (add13)"
    )


def test_long_name_ordinals() -> None:
    chord = ChordSymbol(root="C", quality="Dom13", inversion=3)
    assert format_chord_name(chord, style="long") == "C thirteenth (3rd inversion)"
    chord = ChordSymbol(root="C", quality="Dom13", inversion=11)
    assert format_chord_name(chord, style="long").endswith("(11th inversion)")


def test_long_name_spanish() -> None:
    assert format_chord_name(_chord("Cmaj7/G"), style="long", language="es") == (
        "Do Mayor séptima con bajo en Sol"
    )
    assert format_chord_name(_chord("Bbm¹"), style="long", language="es") == (
        "Si bemol menor (1ª inversión)"
    )


# ── Errors ───────────────────────────────────────────────────────────────────

def test_unknown_style_raises() -> None:
    with pytest.raises(ValueError, match="style"):
        format_chord_name(_chord("C"), style="medium")


def test_unknown_language_raises() -> None:
    with pytest.raises(ValueError, match="language"):
        format_chord_name(_chord("C"), style="long", language="fr")
