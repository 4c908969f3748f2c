"""Unit tests for note, chord and song transposition."""

from chordsheet.chord_parser import parse_chord
from chordsheet.pitch_table import FLAT_NAMES, NOTE_TO_INDEX, SHARP_NAMES
from chordsheet.song_parser import parse_song_text
from chordsheet.transposer import (
    TranspositionControl,
    transpose_chord,
    transpose_note,
    transpose_song,
)


def test_transpose_up_and_down() -> None:
    assert transpose_note("C", 2) == "D"
    assert transpose_note("D", -2) == "C"


def test_negative_shift_wraps_around() -> None:
    assert transpose_note("C", -1) == "B"
    assert transpose_note("A", -14) == "G"


def test_flat_input_keeps_flat_spelling() -> None:
    assert transpose_note("Bb", 1) == "B"
    assert transpose_note("Eb", 1) == "E"
    assert transpose_note("Ab", 1) == "A"
    assert transpose_note("Db", 2) == "Eb"


def test_natural_and_sharp_input_uses_sharps() -> None:
    assert transpose_note("F", 1) == "F#"
    assert transpose_note("C#", 2) == "D#"


def test_unknown_name_is_returned_unchanged() -> None:
    assert transpose_note("H", 3) == "H"
    assert transpose_note("", 3) == ""


def test_octave_identity() -> None:
    for name in set(SHARP_NAMES) | set(FLAT_NAMES):
        assert transpose_note(name, 12) == name
        assert transpose_note(name, -24) == name


def test_round_trip_preserves_pitch_class() -> None:
    for name in NOTE_TO_INDEX:
        for shift in range(-12, 13):
            back = transpose_note(transpose_note(name, shift), -shift)
            assert NOTE_TO_INDEX[back] == NOTE_TO_INDEX[name]


def test_round_trip_is_exact_for_sharp_spellings() -> None:
    for name in SHARP_NAMES:
        for shift in range(-12, 13):
            assert transpose_note(transpose_note(name, shift), -shift) == name


def test_transpose_chord_moves_root_and_bass() -> None:
    chord = parse_chord("Dm7/G")
    assert chord is not None
    moved = transpose_chord(chord, 2)
    assert (moved.root, moved.bass) == ("E", "A")
    assert moved.quality == "Min7"
    assert chord.root == "D"


def test_transpose_song_keeps_ids_and_annotations() -> None:
    song = parse_song_text("[Intro] C G\nHello world").assign_ids()
    moved = transpose_song(song, 2)

    assert [c.root for c in moved.all_chords] == ["D", "A"]
    assert [c.id for c in moved.all_chords] == [c.id for c in song.all_chords]
    assert moved.lines[0].placements[0].chord.raw == "[Intro]"
    assert [c.root for c in song.all_chords] == ["C", "G"]


def test_transpose_song_moves_repeats() -> None:
    song = parse_song_text("C %\nwords")
    moved = transpose_song(song, 2)
    repeat = moved.lines[0].placements[1]
    assert repeat.is_repeat
    assert repeat.chord.root == "D"
    assert repeat.chord.raw == "%"


def test_transposition_control_steps_and_limits() -> None:
    control = TranspositionControl()
    assert control.label == "Original"
    assert control.up()
    assert control.label == "+1"
    control.down()
    control.down()
    assert control.label == "-1"

    limited = TranspositionControl(12)
    assert not limited.up()
    assert limited.offset == 12


def test_transposition_control_clamps_and_resets() -> None:
    control = TranspositionControl(-40)
    assert control.offset == -12
    assert not control.down()
    assert control.reset()
    assert not control.reset()
    assert control.offset == 0
