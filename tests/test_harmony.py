"""Unit tests for key analysis and reharmonization suggestions."""

import pytest

from chordsheet.chord_models import ChordSymbol
from chordsheet.chord_parser import parse_chord
from chordsheet.harmony import Key, analyze_chord, suggest_passing_chords, suggest_substitutions
from chordsheet.name_formatter import format_chord_name

C_MAJOR = Key("C")


def _chord(token: str) -> ChordSymbol:
    chord = parse_chord(token)
    assert chord is not None, token
    return chord


def _names(suggestions) -> list[str]:
    return [format_chord_name(s.chord) for s in suggestions]


# ── Key ──────────────────────────────────────────────────────────────────────

def test_key_rejects_unknown_tonic_and_scale() -> None:
    with pytest.raises(ValueError):
        Key("H")
    with pytest.raises(ValueError, match="scale"):
        Key("C", "dorian")


def test_degree_root() -> None:
    assert C_MAJOR.degree_root("ii") == "D"
    assert Key("Eb").degree_root("IV") == "Ab"
    assert Key("A", "minor").degree_root("bIII") == "C"
    assert C_MAJOR.degree_root("bIII") is None


# ── analyze_chord ────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    ("token", "roman", "function"),
    [
        ("C", "I", "Tonic"),
        ("Am", "vi", "Tonic"),
        ("Dm7", "ii", "Subdominant"),
        ("G7", "V", "Dominant"),
        ("Fm", "iv", "Subdominant"),
        ("D7", "V7/V", "Transition"),
        ("A7", "V7/ii", "Transition"),
        ("Bb7", "bVII7", "Transition"),
        ("Ab", "bVImaj7", "Transition"),
    ],
)
def test_analyze_chord_in_c_major(token: str, roman: str, function: str) -> None:
    analysis = analyze_chord(_chord(token), C_MAJOR)
    assert analysis is not None
    assert analysis.roman == roman
    assert analysis.function == function


def test_diatonic_degree_number() -> None:
    analysis = analyze_chord(_chord("Em"), C_MAJOR)
    assert analysis is not None
    assert analysis.degree == "3"


def test_analyze_chord_in_minor_key() -> None:
    key = Key("A", "minor")
    assert analyze_chord(_chord("Am"), key).roman == "i"
    assert analyze_chord(_chord("E7"), key).roman == "v"
    assert analyze_chord(_chord("F"), key).function == "Tonic"


def test_analyze_chord_outside_key() -> None:
    assert analyze_chord(_chord("F#"), C_MAJOR) is None
    assert analyze_chord(ChordSymbol.annotation("N.C."), C_MAJOR) is None


# ── suggest_substitutions ────────────────────────────────────────────────────

def test_substitutions_for_tonic() -> None:
    assert _names(suggest_substitutions(_chord("C"), C_MAJOR)) == [
        "Cmaj7/E", "Em7", "Am7", "Cmaj7",
    ]


def test_substitutions_for_dominant() -> None:
    suggestions = suggest_substitutions(_chord("G7"), C_MAJOR)
    assert _names(suggestions) == ["G7/B", "C#7", "G9", "Bb7", "Abmaj7"]
    assert suggestions[1].technique == "Tritone substitution"


def test_substitutions_for_subdominant() -> None:
    assert _names(suggest_substitutions(_chord("F"), C_MAJOR)) == ["Dm7", "Fmaj7", "Fm7"]


def test_substitutions_never_repeat_the_chord() -> None:
    names = _names(suggest_substitutions(_chord("Cmaj7"), C_MAJOR))
    assert "Cmaj7" not in names
    assert len(names) == len(set(names))


def test_no_substitutions_outside_key() -> None:
    assert suggest_substitutions(_chord("F#"), C_MAJOR) == []


# ── suggest_passing_chords ───────────────────────────────────────────────────

def test_passing_chords_between_whole_step_roots() -> None:
    suggestions = suggest_passing_chords(_chord("C"), _chord("Dm"), C_MAJOR)
    assert _names(suggestions) == ["A7", "C#dim7", "Em7b5"]


def test_passing_chords_from_one_to_six() -> None:
    suggestions = suggest_passing_chords(_chord("C"), _chord("Am"), C_MAJOR)
    assert _names(suggestions) == ["E7", "C/E", "G7/B", "Bm7b5"]


def test_no_passing_chords_into_the_tonic() -> None:
    assert suggest_passing_chords(_chord("G"), _chord("C"), C_MAJOR) == []
