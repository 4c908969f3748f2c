"""chordsheet: chord-notation parsing and chord-tone computation for song sheets."""

from chordsheet.chord_models import (
    Alteration,
    ChordSymbol,
    ProcessedSong,
    SongChordPlacement,
    SongLine,
)
from chordsheet.chord_parser import parse_chord
from chordsheet.keyboard_range import KeyboardRange, calculate_keyboard_range
from chordsheet.name_formatter import format_chord_name
from chordsheet.song_parser import SongTextParser, parse_song_text
from chordsheet.tone_resolver import ChordTones, resolve_chord_tones
from chordsheet.transposer import transpose_chord, transpose_note, transpose_song

__version__ = "0.1.0"

__all__ = [
    "Alteration",
    "ChordSymbol",
    "ChordTones",
    "KeyboardRange",
    "ProcessedSong",
    "SongChordPlacement",
    "SongLine",
    "SongTextParser",
    "calculate_keyboard_range",
    "format_chord_name",
    "parse_chord",
    "parse_song_text",
    "resolve_chord_tones",
    "transpose_chord",
    "transpose_note",
    "transpose_song",
]
