"""Unit tests for ProcessedSong identity and id-based edits."""

from dataclasses import replace

import pytest

from chordsheet.chord_models import Alteration, ChordSymbol, ProcessedSong
from chordsheet.chord_parser import parse_chord
from chordsheet.song_parser import parse_song_text


def _sample_song() -> ProcessedSong:
    return parse_song_text("[Verse] C G\nHello there\nAm\nGoodbye").assign_ids()


def test_alteration_token() -> None:
    assert Alteration(9, -1).token == "b9"
    assert Alteration(11, 1).token == "#11"


def test_annotation_is_not_resolvable() -> None:
    assert not ChordSymbol.annotation("N.C.").is_resolvable
    assert ChordSymbol(root="C", quality="Mayor").is_resolvable


def test_all_chords_skips_annotations() -> None:
    song = _sample_song()
    assert [c.root for c in song.all_chords] == ["C", "G", "A"]
    assert len(song.lines[0].placements) == 3


def test_assign_ids_is_consecutive() -> None:
    song = _sample_song()
    assert [c.id for c in song.all_chords] == [1, 2, 3]
    assert song.lines[0].placements[0].chord.id is None

    assert [c.id for c in song.assign_ids(start=10).all_chords] == [10, 11, 12]


def test_chord_by_id() -> None:
    song = _sample_song()
    found = song.chord_by_id(2)
    assert found is not None
    assert found.root == "G"
    assert song.chord_by_id(99) is None


def test_replace_chord_returns_new_song() -> None:
    song = _sample_song()
    original = song.chord_by_id(2)
    assert original is not None

    updated = song.replace_chord(replace(original, quality="Dom7"))

    assert updated.chord_by_id(2).quality == "Dom7"
    assert updated.lines[0].chords[1].quality == "Dom7"
    assert song.chord_by_id(2).quality == "Mayor"


def test_replace_chord_unknown_id_raises() -> None:
    song = _sample_song()
    with pytest.raises(KeyError):
        song.replace_chord(ChordSymbol(root="D", quality="Mayor", id=42))
    with pytest.raises(KeyError):
        song.replace_chord(ChordSymbol(root="D", quality="Mayor"))


def test_delete_chord() -> None:
    song = _sample_song().delete_chord(1)
    assert [c.root for c in song.all_chords] == ["G", "A"]
    assert song.lines[0].placements[0].is_annotation

    with pytest.raises(KeyError):
        song.delete_chord(1)


def test_insert_chord_after_shares_column() -> None:
    song = _sample_song()
    new_chord = parse_chord("D7")
    assert new_chord is not None

    edited = song.insert_chord_after(2, new_chord)

    assert [c.root for c in edited.all_chords] == ["C", "G", "D", "A"]
    inserted = edited.chord_by_id(4)
    assert inserted is not None
    assert inserted.quality == "Dom7"
    assert inserted.position == song.chord_by_id(2).position


def test_insert_chord_after_explicit_column() -> None:
    new_chord = parse_chord("E")
    assert new_chord is not None
    edited = _sample_song().insert_chord_after(3, new_chord, column=6)
    assert [(p.chord.root, p.column) for p in edited.lines[1].placements] == [("A", 0), ("E", 6)]


def test_insert_chord_after_unknown_id_raises() -> None:
    with pytest.raises(KeyError):
        _sample_song().insert_chord_after(7, ChordSymbol(root="C", quality="Mayor"))


def test_assign_ids_skips_repeats() -> None:
    song = parse_song_text("C % G\nwords").assign_ids()
    placements = song.lines[0].placements
    assert placements[1].is_repeat
    assert placements[1].chord.id is None
    assert [c.id for c in song.all_chords] == [1, 2]
