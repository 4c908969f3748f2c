"""chordsheet CLI entry point."""

import sys
from dataclasses import replace
from typing import TextIO

import click

from chordsheet import __version__
from chordsheet.chord_models import SongLine
from chordsheet.chord_parser import parse_chord
from chordsheet.harmony import Key, analyze_chord, suggest_substitutions
from chordsheet.keyboard_range import KeyboardRange, calculate_keyboard_range
from chordsheet.name_formatter import format_chord_name
from chordsheet.pitch_table import midi_to_note_name
from chordsheet.song_parser import SongTextParser
from chordsheet.tone_resolver import resolve_chord_tones
from chordsheet.transposer import MAX_TRANSPOSITION, TranspositionControl

KEY_MARKS = {"bass": "B", "pressed": "*"}


def _render_line(line: SongLine, style: str, transposition: int) -> list[str]:
    """Render a SongLine as a chord row (if any) above its lyrics."""
    rendered: list[str] = []
    if line.placements:
        row = ""
        for placement in line.placements:
            if placement.is_repeat:
                text = placement.chord.raw
            else:
                text = format_chord_name(placement.chord, style, transposition)
            if len(row) > placement.column:
                row += " "
            row = row.ljust(placement.column) + text
        rendered.append(row)
    if not line.is_instrumental:
        rendered.append(line.lyrics)
    return rendered


def _render_keyboard(window: KeyboardRange, pressed: tuple[int, ...], bass: int | None) -> list[str]:
    """
    Draw the window as two text rows.

    Each white key is three columns wide; a black key marker sits on the
    boundary after the white key it follows. B = bass, * = pressed.
    """
    top = ""
    bottom = ""
    for key in window.keys(pressed=pressed, bass=bass):
        mark = KEY_MARKS.get(key.role or "")
        if key.is_black:
            top = top[:-1] + (mark or "#") if top else (mark or "#")
        else:
            top += "   "
            bottom += f"|{mark or ' '} "
    return [top.rstrip(), bottom + "|"]


def _parse_key(tonic: str, minor: bool) -> Key:
    try:
        return Key(tonic, "minor" if minor else "major")
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--key") from exc


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordsheet")
def main() -> None:
    """chordsheet: chord sheet parser and chord-tone calculator."""


# ── song subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("song_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--transpose",
    "-t",
    type=click.IntRange(-MAX_TRANSPOSITION, MAX_TRANSPOSITION),
    default=0,
    show_default=True,
    help="Semitones to transpose every chord by.",
)
@click.option(
    "--style",
    type=click.Choice(["short", "long"], case_sensitive=False),
    default="short",
    show_default=True,
    help="Chord name style used above the lyrics.",
)
@click.option(
    "--tab-width",
    type=click.IntRange(1, 16),
    default=4,
    show_default=True,
    help="Spaces per tab when measuring chord columns.",
)
def song(song_file: TextIO, transpose: int, style: str, tab_width: int) -> None:
    """
    Parse a plain-text song sheet and print it back, optionally transposed.

    SONG_FILE is a text file with chord lines above lyric lines ("-" for stdin).

    \b
    Examples:
      chordsheet song wonderwall.txt
      chordsheet song wonderwall.txt --transpose -2
      cat song.txt | chordsheet song - --style long
    """
    control = TranspositionControl(transpose)
    parsed = SongTextParser(tab_width=tab_width).parse(song_file.read()).assign_ids()

    if not parsed.all_chords:
        click.echo("  WARNING: No chords detected in the song sheet.", err=True)
        sys.exit(1)

    click.echo(f"chordsheet v{__version__}")
    click.echo(f"  Lines  : {len(parsed.lines)}  |  Chords: {len(parsed.all_chords)}")
    click.echo(f"  Key    : {control.label}")
    click.echo()

    for line in parsed.lines:
        for text in _render_line(line, style.lower(), control.offset):
            click.echo(text)


# ── chord subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("token")
@click.option(
    "--transpose",
    "-t",
    type=click.IntRange(-MAX_TRANSPOSITION, MAX_TRANSPOSITION),
    default=0,
    show_default=True,
    help="Semitones to transpose the chord by.",
)
@click.option(
    "--inversion",
    "-i",
    type=click.IntRange(min=0),
    default=None,
    help="Inversion to apply (overrides a superscript in TOKEN).",
)
@click.option(
    "--language",
    type=click.Choice(["en", "es"], case_sensitive=False),
    default="en",
    show_default=True,
    help="Language of the long chord name.",
)
@click.option(
    "--min-white-keys",
    type=click.IntRange(1, 52),
    default=20,
    show_default=True,
    help="Minimum number of white keys in the keyboard window.",
)
@click.option(
    "--padding",
    type=click.IntRange(0, 24),
    default=5,
    show_default=True,
    metavar="SEMITONES",
    help="Room left around the outer chord tones.",
)
def chord(
    token: str,
    transpose: int,
    inversion: int | None,
    language: str,
    min_white_keys: int,
    padding: int,
) -> None:
    """
    Show the notes of a single chord and where they sit on a keyboard.

    \b
    Examples:
      chordsheet chord Cmaj7
      chordsheet chord "G/B" --transpose 2
      chordsheet chord Am7 --inversion 1 --language es
    """
    parsed = parse_chord(token)
    if parsed is None:
        click.echo(f"  ERROR: '{token}' is not a chord symbol.", err=True)
        sys.exit(1)
    if inversion is not None:
        parsed = replace(parsed, inversion=inversion)

    tones = resolve_chord_tones(parsed, transpose)
    window = calculate_keyboard_range(tones.layout, min_white_keys=min_white_keys, padding=padding)

    click.echo(f"  Chord  : {format_chord_name(parsed, 'short', transpose)}")
    click.echo(f"  Name   : {format_chord_name(parsed, 'long', transpose, language.lower())}")
    click.echo("  Notes  : " + " ".join(midi_to_note_name(t) for t in tones.pressed))
    if tones.bass is not None:
        click.echo(f"  Bass   : {midi_to_note_name(tones.bass)}")
    click.echo(
        f"  Window : {midi_to_note_name(window.start)}–{midi_to_note_name(window.end)}"
        f"  ({window.white_key_count} white keys)"
    )
    click.echo()
    for row in _render_keyboard(window, tones.pressed, tones.bass):
        click.echo(row)


# ── analyze subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("song_file", type=click.File("r", encoding="utf-8"))
@click.option("--key", "tonic", default="C", show_default=True, help="Tonic of the song's key.")
@click.option("--minor", is_flag=True, help="Treat the key as minor.")
@click.option("--suggest/--no-suggest", default=True, show_default=True, help="List reharmonization ideas.")
def analyze(song_file: TextIO, tonic: str, minor: bool, suggest: bool) -> None:
    """
    Roman-numeral analysis of every chord in a song sheet.

    \b
    Examples:
      chordsheet analyze song.txt --key G
      chordsheet analyze song.txt --key A --minor --no-suggest
    """
    key = _parse_key(tonic, minor)
    parsed = SongTextParser().parse(song_file.read())

    if not parsed.all_chords:
        click.echo("  WARNING: No chords detected in the song sheet.", err=True)
        sys.exit(1)

    click.echo(f"chordsheet v{__version__}")
    click.echo(f"  Key    : {key.tonic} {key.scale}")
    click.echo()

    for item in parsed.all_chords:
        analysis = analyze_chord(item, key)
        name = format_chord_name(item)
        if analysis is None:
            click.echo(f"  {name:<10} ?")
        else:
            click.echo(f"  {name:<10} {analysis.roman:<10} {analysis.function}")
        if suggest:
            for suggestion in suggest_substitutions(item, key):
                click.echo(
                    f"      → {format_chord_name(suggestion.chord):<10} "
                    f"{suggestion.technique}: {suggestion.justification}"
                )
