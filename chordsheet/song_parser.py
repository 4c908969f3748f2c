"""SongTextParser: splits a plain-text song sheet into chord and lyric lines."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Final

from chordsheet.chord_models import ChordSymbol, ProcessedSong, SongChordPlacement, SongLine
from chordsheet.chord_parser import parse_chord

# Leading "[Chorus]" tag or "Intro:" style label, with surrounding blanks.
LABEL_RE: Final = re.compile(r"^\s*(?:\[[^\]]+\]|[^:\[\]]+:)\s*")
BRACKET_ONLY_RE: Final = re.compile(r"^\[[^\]]+\]$")

# A parenthesized group stays one token even when it contains spaces.
TOKEN_RE: Final = re.compile(r"\([^)]*\)|\S+")
# Chords sharing one slot are joined with "-", "–" or "|".
SUB_TOKEN_RE: Final = re.compile(r"[^\s\-–|]+")

ANNOTATION_TOKENS: Final[frozenset[str]] = frozenset({"n.c.", "x"})
REPEAT_TOKEN: Final[str] = "%"
# Chord lines may be wrapped as "// C G //".
WRAP_DELIMITER: Final[str] = "//"

CHORD_RATIO_THRESHOLD: Final[float] = 0.5


def _is_group(token: str) -> bool:
    return token.startswith("(") and token.endswith(")")


class SongTextParser:
    """
    Turns free-form song text into a ProcessedSong.

    Classification
    --------------
    Each line (minus any leading label and "//" wrapping) is tokenised on
    whitespace, keeping parenthesized groups whole, and every token is split
    again on the slot separators ``-``, ``–`` and ``|``. Each sub-token is
    then one of:

      - chord-like:  it parses as a chord, or is the "%" repeat marker;
      - annotation:  "N.C.", "x" or anything inside parentheses;
      - lyric-like:  anything else.

    A line is a chord line when it has at least one sub-token, no lyric-like
    sub-token and at least half of its sub-tokens are chord-like.

    Repeats
    -------
    "%" repeats the previous chord of the same line. Its placement carries a
    copy of that chord; with nothing to repeat it becomes an annotation.

    Pairing
    -------
    A chord line takes the following line as its lyrics unless that line is
    itself a chord line, in which case the chord line is instrumental.

    The parser never raises; at worst every line comes back as plain lyrics.
    """

    def __init__(self, tab_width: int = 4) -> None:
        """
        Args:
            tab_width: Spaces substituted for each tab before columns are
                       measured.
        """
        self.tab_width = tab_width

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> ProcessedSong:
        """
        Parse a whole song sheet.

        Args:
            text: Lyrics interleaved with chord lines.

        Returns:
            ProcessedSong with one SongLine per lyric line or unpaired chord
            line. Chord ids are left unset; see ProcessedSong.assign_ids().
        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        raw_lines = text.replace("\t", " " * self.tab_width).split("\n")

        lines: list[SongLine] = []
        i = 0
        while i < len(raw_lines):
            current = raw_lines[i]
            label, body, offset = self._split_label(current)

            if not self._is_chord_content(body):
                lines.append(SongLine(lyrics=current))
                i += 1
                continue

            placements = self._place_chords(label, body, offset)
            next_line = raw_lines[i + 1] if i + 1 < len(raw_lines) else None
            if next_line is not None and not self.is_chord_line(next_line):
                lines.append(SongLine(lyrics=next_line, placements=placements))
                i += 2
            else:
                lines.append(SongLine(lyrics="", placements=placements, is_instrumental=True))
                i += 1

        return ProcessedSong(lines=tuple(lines))

    def is_chord_line(self, line: str) -> bool:
        """True when ``line`` (ignoring a leading label) holds chords rather than lyrics."""
        _, body, _ = self._split_label(line.replace("\t", " " * self.tab_width))
        return self._is_chord_content(body)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _split_label(self, line: str) -> tuple[str, str, int]:
        """Return (label, rest of line, column where the rest starts)."""
        match = LABEL_RE.match(line)
        if not match:
            return "", line, 0
        return match.group(0).strip(), line[match.end():], match.end()

    @staticmethod
    def _unwrap(body: str) -> tuple[str, list[int]]:
        """
        Blank out the "//" delimiters of a wrapped chord line.

        Returns the body with each delimiter replaced by spaces, so columns
        are unchanged, and the columns where the delimiters were found.
        """
        stripped = body.lstrip()
        if not stripped.startswith(WRAP_DELIMITER):
            return body, []

        blank = " " * len(WRAP_DELIMITER)
        start = len(body) - len(stripped)
        body = body[:start] + blank + body[start + len(WRAP_DELIMITER):]
        columns = [start]

        if body.rstrip().endswith(WRAP_DELIMITER):
            end = len(body.rstrip()) - len(WRAP_DELIMITER)
            body = body[:end] + blank + body[end + len(WRAP_DELIMITER):]
            columns.append(end)
        return body, columns

    def _is_chord_content(self, body: str) -> bool:
        stripped = body.strip()
        if not stripped:
            return False
        if BRACKET_ONLY_RE.match(stripped) or stripped.endswith(":"):
            return False

        unwrapped, _ = self._unwrap(body)
        chord_like = annotations = lyric_like = 0
        for token in TOKEN_RE.findall(unwrapped):
            if _is_group(token):
                parts = SUB_TOKEN_RE.findall(token[1:-1])
                if not parts:
                    annotations += 1
                for part in parts:
                    if part == REPEAT_TOKEN or parse_chord(part) is not None:
                        chord_like += 1
                    else:
                        annotations += 1
                continue

            for part in SUB_TOKEN_RE.findall(token):
                if part == REPEAT_TOKEN or parse_chord(part) is not None:
                    chord_like += 1
                elif part.lower() in ANNOTATION_TOKENS:
                    annotations += 1
                else:
                    lyric_like += 1

        total = chord_like + annotations + lyric_like
        if total == 0 or lyric_like > 0:
            return False
        return chord_like / total >= CHORD_RATIO_THRESHOLD

    def _place_chords(self, label: str, body: str, offset: int) -> tuple[SongChordPlacement, ...]:
        placements: list[SongChordPlacement] = []
        if label:
            placements.append(_annotation(label, 0))

        body, delimiters = self._unwrap(body)
        if delimiters:
            placements.append(_annotation(WRAP_DELIMITER, delimiters[0] + offset))

        last: ChordSymbol | None = None
        for token_match in TOKEN_RE.finditer(body):
            token = token_match.group(0)
            column = token_match.start() + offset

            if not _is_group(token):
                placed, last = self._place_parts(token, column, last)
                placements.extend(placed)
                continue

            # Columns inside a group start after the opening parenthesis.
            grouped, group_last = self._place_parts(token[1:-1], column + 1, last)
            if any(not p.is_annotation for p in grouped):
                placements.extend(grouped)
                last = group_last
            else:
                placements.append(_annotation(token, column))

        if len(delimiters) > 1:
            placements.append(_annotation(WRAP_DELIMITER, delimiters[1] + offset))
        return tuple(placements)

    def _place_parts(
        self,
        token: str,
        column: int,
        last: ChordSymbol | None,
    ) -> tuple[list[SongChordPlacement], ChordSymbol | None]:
        """Place the sub-tokens of ``token``; returns them and the last chord seen."""
        placed: list[SongChordPlacement] = []
        for part_match in SUB_TOKEN_RE.finditer(token):
            part = part_match.group(0)
            part_column = column + part_match.start()

            if part == REPEAT_TOKEN:
                if last is None:
                    placed.append(_annotation(part, part_column))
                else:
                    repeated = replace(last, raw=part, id=None, position=part_column)
                    placed.append(
                        SongChordPlacement(chord=repeated, column=part_column, is_repeat=True)
                    )
                continue

            chord = parse_chord(part)
            if chord is None:
                placed.append(_annotation(part, part_column))
            else:
                last = replace(chord, position=part_column)
                placed.append(SongChordPlacement(chord=last, column=part_column))
        return placed, last


def _annotation(text: str, column: int) -> SongChordPlacement:
    return SongChordPlacement(chord=ChordSymbol.annotation(text), column=column, is_annotation=True)


def parse_song_text(text: str) -> ProcessedSong:
    """Parse ``text`` with a default SongTextParser."""
    return SongTextParser().parse(text)
